"""Application service: Create Order use case.

Order creation is the only place that commits stock.  The flow:

1. Resolve each requested product/variant and snapshot its current price.
2. Let the Order aggregate validate everything that needs no stock.
3. Price delivery from the store settings.
4. Reserve stock line by line (fail fast, no rollback of earlier lines).
5. Persist, then run best-effort follow-ups (notification, COD cart clear).
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from storefront.application import side_effects
from storefront.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import (
    Order,
    OrderLine,
    PaymentMethod,
    ShippingAddress,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.ports import NotificationDispatcher, OrderEventType
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.domain.service.delivery_pricing import delivery_charge, ensure_deliverable
from storefront.domain.service.stock_reservation_service import StockReservationService

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        settings_repo: SettingsRepository,
        cart_repo: CartRepository | None = None,
        notifier: NotificationDispatcher | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._settings_repo = settings_repo
        self._cart_repo = cart_repo
        self._notifier = notifier

    def handle(
        self,
        user_id: str,
        item_specs: list[OrderItemSpec],
        payment_method: str,
        shipping_address: ShippingAddress,
        distance: Decimal | str | float = Decimal("0"),
        manual_delivery_charge: Money | None = None,
        notes: str = "",
    ) -> OrderDTO:
        """Place a new order for ``user_id``."""
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        method = PaymentMethod.parse(payment_method)
        distance = self._parse_distance(distance)

        lines = [self._build_line(spec) for spec in item_specs]

        settings = self._settings_repo.get()
        ensure_deliverable(distance, settings)

        subtotal = Money.total(line.subtotal for line in lines)
        charge = delivery_charge(subtotal, distance, settings, manual_delivery_charge)

        # Validate before touching stock so a malformed order moves nothing.
        order = Order.create(
            user_id=user_id,
            items=lines,
            payment_method=method,
            shipping_address=shipping_address,
            delivery_charge=charge,
            notes=notes,
        )

        StockReservationService(self._product_repo).reserve_lines(order.items)

        self._order_repo.save(order)
        logger.info(
            "order created",
            extra={
                "order_number": order.order_number,
                "user_id": order.user_id,
                "status": order.status.value,
                "total": str(order.total_amount.amount),
            },
        )

        # Gateway orders clear the cart once payment is verified.
        if not method.requires_gateway:
            side_effects.notify(self._notifier, OrderEventType.ORDER_PLACED, order)
            side_effects.clear_cart(self._cart_repo, order.user_id)

        return order_to_dto(order)

    # --- Helpers --------------------------------------------------------------

    def _build_line(self, spec: OrderItemSpec) -> OrderLine:
        if not spec.product_id:
            raise ValidationError("Invalid cart item. Missing product id.")
        product = self._product_repo.get_by_id(spec.product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")

        source = product.stock_source(spec.variant_id)
        return OrderLine(
            product_id=product.id,
            product_name=product.name,
            quantity=Quantity(spec.quantity),
            unit_price=source.unit_price,  # <-- price snapshot
            variant_id=source.variant_id,
            variant_label=source.label,
        )

    @staticmethod
    def _parse_distance(raw: Decimal | str | float) -> Decimal:
        try:
            distance = Decimal(str(raw))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid delivery distance: {raw!r}") from exc
        if distance < 0:
            raise ValidationError("Delivery distance cannot be negative")
        return distance
