"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Lifecycle statuses are
always emitted in their canonical form.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for."""

    product_id: str
    quantity: int
    variant_id: str | None = None


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    variant_label: str
    quantity: int
    unit_price: str  # formatted, e.g. "₹15.00"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    user_id: str
    status: str
    payment_method: str
    payment_status: str
    items: list[OrderLineDTO]
    items_total: str
    delivery_charge: str
    total: str
    created_at: str
    gateway_order_id: str | None = None
    payment_id: str | None = None


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    variant_id: str | None
    variant_label: str
    quantity: int
    unit_price: str
    subtotal: str


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: list[CartLineDTO]
    total: str


@dataclass(frozen=True)
class PaymentIntentDTO:
    """Output: what a client needs to open the gateway checkout."""

    order_id: int
    gateway_order_id: str
    amount: int  # minor units
    currency: str
    key_id: str | None = None


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        user_id=order.user_id,
        status=order.status.value,
        payment_method=order.payment_method.value,
        payment_status=order.payment_status.value,
        items=[
            OrderLineDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                variant_label=item.variant_label,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        items_total=str(order.items_total),
        delivery_charge=str(order.delivery_charge),
        total=str(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        gateway_order_id=order.gateway_order_id,
        payment_id=order.payment_id,
    )


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        user_id=cart.user_id,
        items=[
            CartLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                variant_id=line.variant_id,
                variant_label=line.variant_label,
                quantity=line.quantity,
                unit_price=str(line.unit_price),
                subtotal=str(line.subtotal),
            )
            for line in cart.items
        ],
        total=str(cart.total_amount),
    )
