"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories — no file I/O.
"""

from decimal import Decimal

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.application.update_cart import AddToCartHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.order import ShippingAddress
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.settings import DeliverySettings
from storefront.domain.model.value_objects import Money
from storefront.domain.ports import OrderEventType
from tests.fakes import (
    FailingDispatcher,
    FakeCartRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeSettingsRepository,
    RecordingDispatcher,
)

ADDRESS = ShippingAddress(name="Asha", street="12 MG Road", city="Pune")


class _Env:
    """Handler plus the fakes it was wired with."""

    def __init__(self, settings: DeliverySettings | None = None, notifier=None) -> None:
        self.products = FakeProductRepository([
            Product(id="1", name="Rice", price=Money.of("60.00"), stock=5),
            Product(id="2", name="Dal", price=Money.of("90.00"), stock=10),
            Product(
                id="3",
                name="Oil",
                price=Money.of("150.00"),
                stock=0,
                variants=[Variant(id="3-1", label="1 L", price=Money.of("140.00"), stock=2)],
            ),
        ])
        self.orders = FakeOrderRepository()
        self.carts = FakeCartRepository()
        self.notifier = notifier if notifier is not None else RecordingDispatcher()
        self.handler = CreateOrderHandler(
            self.orders,
            self.products,
            FakeSettingsRepository(settings),
            cart_repo=self.carts,
            notifier=self.notifier,
        )

    def place(self, specs, method="cod", **kwargs):
        return self.handler.handle("u1", specs, method, ADDRESS, **kwargs)


class TestCreateOrderHappyPath:

    def test_creates_cod_order(self):
        env = _Env()
        dto = env.place([OrderItemSpec("1", 2), OrderItemSpec("2", 1)])
        assert dto.status == "CREATED"
        assert dto.payment_status == "pending"
        assert dto.total == "₹210.00"
        assert dto.id == 1

    def test_gateway_order_starts_payment_pending(self):
        dto = _Env().place([OrderItemSpec("1", 1)], method="gateway")
        assert dto.status == "PAYMENT_PENDING"

    def test_reserves_stock_per_line(self):
        env = _Env()
        env.place([OrderItemSpec("1", 2), OrderItemSpec("3", 2, "3-1")])
        assert env.products.get_by_id("1").stock == 3
        assert env.products.get_by_id("3").variants[0].stock == 0

    def test_variant_price_is_snapshotted(self):
        env = _Env()
        dto = env.place([OrderItemSpec("3", 1, "3-1")])
        oil = env.products.get_by_id("3")
        oil.variants[0].price = Money.of("999")
        saved = env.orders.get_by_id(dto.id)
        assert saved.items[0].unit_price == Money.of("140.00")
        assert saved.items[0].variant_label == "1 L"


class TestCreateOrderDelivery:

    def test_slab_charge_added_to_total(self):
        env = _Env(settings=DeliverySettings.default())
        dto = env.place([OrderItemSpec("1", 1)], distance="7")
        assert dto.delivery_charge == "₹80.00"
        assert dto.total == "₹140.00"

    def test_no_settings_means_free_delivery(self):
        dto = _Env().place([OrderItemSpec("1", 1)], distance=Decimal("15"))
        assert dto.delivery_charge == "₹0.00"

    def test_beyond_max_distance_rejected_before_reserving(self):
        env = _Env(settings=DeliverySettings.default())
        with pytest.raises(ValidationError, match="exceeds the maximum"):
            env.place([OrderItemSpec("1", 1)], distance="25")
        assert env.products.get_by_id("1").stock == 5

    def test_garbage_distance_rejected(self):
        with pytest.raises(ValidationError, match="Invalid delivery distance"):
            _Env().place([OrderItemSpec("1", 1)], distance="far")


class TestCreateOrderStock:

    def test_shortfall_persists_nothing(self):
        env = _Env()
        with pytest.raises(InsufficientStockError):
            env.place([OrderItemSpec("1", 6)])
        assert env.orders.list_for_user("u1") == []

    def test_cart_adds_do_not_hold_but_order_does(self):
        env = _Env()
        add = AddToCartHandler(env.carts, env.products)
        add.handle("u1", "1", 3)
        with pytest.raises(InsufficientStockError):
            add.handle("u1", "1", 3)

        env.place([OrderItemSpec("1", 3)])
        with pytest.raises(InsufficientStockError, match="need 3, have 2"):
            env.place([OrderItemSpec("1", 3)])

    def test_earlier_lines_not_rolled_back(self):
        env = _Env()
        with pytest.raises(InsufficientStockError):
            env.place([OrderItemSpec("2", 4), OrderItemSpec("1", 9)])
        assert env.products.get_by_id("2").stock == 6
        assert env.orders.list_for_user("u1") == []


class TestCreateOrderValidation:

    def test_unknown_product_rejected(self):
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            _Env().place([OrderItemSpec("99", 1)])

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            _Env().place([OrderItemSpec("1", -1)])

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _Env().place([])

    def test_unknown_payment_method_rejected(self):
        with pytest.raises(ValidationError, match="Valid payment method"):
            _Env().place([OrderItemSpec("1", 1)], method="barter")

    def test_incomplete_address_moves_no_stock(self):
        env = _Env()
        with pytest.raises(ValidationError, match="Complete shipping address"):
            env.handler.handle("u1", [OrderItemSpec("1", 1)], "cod", ShippingAddress("", ""))
        assert env.products.get_by_id("1").stock == 5


class TestCreateOrderFollowUps:

    def test_cod_order_notifies_and_clears_cart(self):
        env = _Env()
        AddToCartHandler(env.carts, env.products).handle("u1", "1", 1)
        dto = env.place([OrderItemSpec("1", 1)])
        assert [e.type for e in env.notifier.events] == [OrderEventType.ORDER_PLACED]
        assert env.notifier.events[0].order_number == dto.order_number
        assert env.carts.get_for_user("u1").is_empty

    def test_gateway_order_keeps_cart_until_paid(self):
        env = _Env()
        AddToCartHandler(env.carts, env.products).handle("u1", "1", 1)
        env.place([OrderItemSpec("1", 1)], method="gateway")
        assert env.notifier.events == []
        assert not env.carts.get_for_user("u1").is_empty

    def test_notification_failure_does_not_fail_order(self):
        env = _Env(notifier=FailingDispatcher())
        dto = env.place([OrderItemSpec("1", 1)])
        assert env.orders.get_by_id(dto.id) is not None
