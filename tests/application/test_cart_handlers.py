"""Integration tests for the cart use cases, including save-conflict retries."""

import pytest

from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart import (
    MAX_ATTEMPTS,
    AddToCartHandler,
    ClearCartHandler,
    RemoveFromCartHandler,
    SetCartQuantityHandler,
)
from storefront.domain.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeProductRepository


def _products() -> FakeProductRepository:
    return FakeProductRepository([
        Product(id="1", name="Rice", price=Money.of("60.00"), stock=5),
        Product(
            id="2",
            name="Tea",
            price=Money.of("120.00"),
            stock=0,
            variants=[Variant(id="2-1", label="250 g", price=Money.of("95.00"), stock=4)],
        ),
    ])


class TestAddToCart:

    def test_first_add_creates_cart(self):
        carts = FakeCartRepository()
        dto = AddToCartHandler(carts, _products()).handle("u1", "1", 2)
        assert dto.total == "₹120.00"
        assert carts.get_for_user("u1").version == 1

    def test_sequential_adds_checked_against_current_stock(self):
        carts, products = FakeCartRepository(), _products()
        handler = AddToCartHandler(carts, products)
        handler.handle("u1", "1", 3)
        with pytest.raises(InsufficientStockError):
            handler.handle("u1", "1", 3)
        assert carts.get_for_user("u1").items[0].quantity == 3
        assert products.get_by_id("1").stock == 5

    def test_variant_line(self):
        dto = AddToCartHandler(FakeCartRepository(), _products()).handle("u1", "2", 1, "2-1")
        assert dto.items[0].variant_label == "250 g"
        assert dto.items[0].unit_price == "₹95.00"

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            AddToCartHandler(FakeCartRepository(), _products()).handle("u1", "9", 1)

    def test_missing_product_id(self):
        with pytest.raises(ValidationError, match="Product ID is required"):
            AddToCartHandler(FakeCartRepository(), _products()).handle("u1", "", 1)


class TestConflictRetry:

    def test_conflict_is_retried(self):
        carts = FakeCartRepository(conflicts=MAX_ATTEMPTS - 1)
        dto = AddToCartHandler(carts, _products()).handle("u1", "1", 1)
        assert dto.items[0].quantity == 1
        assert carts.save_attempts == MAX_ATTEMPTS

    def test_gives_up_after_max_attempts(self):
        carts = FakeCartRepository(conflicts=MAX_ATTEMPTS)
        with pytest.raises(ConcurrentModificationError, match="gave up"):
            AddToCartHandler(carts, _products()).handle("u1", "1", 1)
        assert carts.save_attempts == MAX_ATTEMPTS

    def test_retry_does_not_double_apply(self):
        carts, products = FakeCartRepository(), _products()
        AddToCartHandler(carts, products).handle("u1", "1", 1)
        carts.conflicts = 1
        dto = AddToCartHandler(carts, products).handle("u1", "1", 1)
        assert dto.items[0].quantity == 2


class TestSetQuantity:

    def test_zero_removes_line_and_updates_total(self):
        carts, products = FakeCartRepository(), _products()
        AddToCartHandler(carts, products).handle("u1", "1", 2)
        AddToCartHandler(carts, products).handle("u1", "2", 1, "2-1")
        dto = SetCartQuantityHandler(carts, products).handle("u1", "1", 0)
        assert [line.product_id for line in dto.items] == ["2"]
        assert dto.total == "₹95.00"

    def test_increase_checked_against_stock(self):
        carts, products = FakeCartRepository(), _products()
        AddToCartHandler(carts, products).handle("u1", "2", 1, "2-1")
        with pytest.raises(InsufficientStockError):
            SetCartQuantityHandler(carts, products).handle("u1", "2", 5, "2-1")

    def test_line_not_in_cart(self):
        carts, products = FakeCartRepository(), _products()
        AddToCartHandler(carts, products).handle("u1", "1", 1)
        with pytest.raises(EntityNotFoundError, match="Item not found in cart"):
            SetCartQuantityHandler(carts, products).handle("u1", "2", 1)

    def test_no_cart(self):
        with pytest.raises(EntityNotFoundError, match="Cart not found"):
            SetCartQuantityHandler(FakeCartRepository(), _products()).handle("u1", "1", 1)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            SetCartQuantityHandler(FakeCartRepository(), _products()).handle("u1", "1", -1)


class TestRemoveAndClear:

    def test_remove_line(self):
        carts, products = FakeCartRepository(), _products()
        AddToCartHandler(carts, products).handle("u1", "1", 1)
        dto = RemoveFromCartHandler(carts, products).handle("u1", "1")
        assert dto.items == []
        assert dto.total == "₹0.00"

    def test_clear(self):
        carts, products = FakeCartRepository(), _products()
        AddToCartHandler(carts, products).handle("u1", "1", 1)
        ClearCartHandler(carts, products).handle("u1")
        assert carts.get_for_user("u1").is_empty


class TestShowCart:

    def test_creates_empty_cart_on_first_access(self):
        carts = FakeCartRepository()
        dto = ShowCartHandler(carts).handle("u1")
        assert dto.items == []
        assert carts.get_for_user("u1") is not None
