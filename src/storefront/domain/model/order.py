"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items and its position
in the payment/fulfillment lifecycle.  All lifecycle moves go through
``transition_to`` so that the adjacency table is the single authority on
which moves are legal.
"""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    CREATED = "CREATED"
    PAYMENT_PENDING = "PAYMENT_PENDING"
    PAID = "PAID"
    ADMIN_CONFIRMED = "ADMIN_CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        """Translate a boundary value (canonical or legacy alias) to a status."""
        value = (raw or "").strip()
        if value in LEGACY_STATUS_ALIASES:
            return LEGACY_STATUS_ALIASES[value]
        try:
            return cls(value)
        except ValueError as exc:
            raise ValidationError(f"Unknown order status: {raw!r}") from exc


# Lowercase statuses written by older clients and records.
LEGACY_STATUS_ALIASES: dict[str, OrderStatus] = {
    "pending": OrderStatus.CREATED,
    "confirmed": OrderStatus.ADMIN_CONFIRMED,
    "processing": OrderStatus.ADMIN_CONFIRMED,
    "shipped": OrderStatus.SHIPPED,
    "delivered": OrderStatus.DELIVERED,
    "cancelled": OrderStatus.CANCELLED,
}

ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.CREATED: frozenset({
        OrderStatus.PAYMENT_PENDING,
        OrderStatus.PAID,
        OrderStatus.ADMIN_CONFIRMED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.PAYMENT_PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.ADMIN_CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.ADMIN_CONFIRMED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

# States from which a gateway payment intent may be created.  CANCELLED is
# only reachable through the re-reservation recovery path.
PAYABLE_STATUSES = frozenset({
    OrderStatus.CREATED,
    OrderStatus.PAYMENT_PENDING,
    OrderStatus.CANCELLED,
})

# A customer may only cancel before the order has been paid for.
USER_CANCELLABLE_STATUSES = frozenset({OrderStatus.CREATED, OrderStatus.PAYMENT_PENDING})


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    COD = "cod"
    GATEWAY = "gateway"

    @property
    def requires_gateway(self) -> bool:
        return self is PaymentMethod.GATEWAY

    @classmethod
    def parse(cls, raw: str | None) -> PaymentMethod:
        try:
            return cls((raw or "").strip().lower())
        except ValueError as exc:
            raise ValidationError("Valid payment method is required") from exc


@dataclass(frozen=True)
class ShippingAddress:
    name: str
    street: str
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""
    phone: str = ""

    def validate(self) -> None:
        if not self.name.strip() or not self.street.strip():
            raise ValidationError("Complete shipping address is required")


@dataclass(frozen=True)
class OrderLine:
    """Immutable price snapshot of one product/variant at order creation."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    variant_id: str | None = None
    variant_label: str = ""

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def display_name(self) -> str:
        if self.variant_label:
            return f"{self.product_name} ({self.variant_label})"
        return self.product_name


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


def generate_order_number() -> str:
    """``ORD-<epoch ms>-<5 upper-case base36 chars>``."""
    suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=5))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"


@dataclass
class Order:
    """Aggregate root for placed purchases.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules and picks the initial lifecycle state.  The
    ``__init__`` is intentionally simple so the repository can
    reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: str
    order_number: str
    items: list[OrderLine]
    payment_method: PaymentMethod
    shipping_address: ShippingAddress
    delivery_charge: Money = field(default_factory=Money.zero)
    status: OrderStatus = OrderStatus.CREATED
    payment_status: PaymentStatus = PaymentStatus.PENDING
    gateway_order_id: str | None = None
    payment_id: str | None = None
    payment_signature: str | None = None
    hidden_for_user: bool = False
    notes: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderLine],
        payment_method: PaymentMethod,
        shipping_address: ShippingAddress,
        delivery_charge: Money | None = None,
        notes: str = "",
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not user_id or not str(user_id).strip():
            raise ValidationError("User is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        shipping_address.validate()

        initial = (
            OrderStatus.PAYMENT_PENDING
            if payment_method.requires_gateway
            else OrderStatus.CREATED
        )
        return Order(
            id=None,
            user_id=str(user_id).strip(),
            order_number=generate_order_number(),
            items=list(items),
            payment_method=payment_method,
            shipping_address=shipping_address,
            delivery_charge=delivery_charge or Money.zero(),
            status=initial,
            notes=notes,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target == self.status or target in ALLOWED_TRANSITIONS[self.status]

    def ensure_can_transition_to(self, target: OrderStatus) -> None:
        if not self.can_transition_to(target):
            raise InvalidTransitionError(self.status.value, target.value)

    def transition_to(self, target: OrderStatus) -> None:
        """Move to ``target`` if the adjacency table allows it.

        Setting the current status again is a no-op.  Cancellation must
        go through ``cancel()`` so the caller is reminded that stock has
        to be released first.
        """
        self.ensure_can_transition_to(target)
        self.status = target

    def cancel(self) -> None:
        """Transition to CANCELLED.

        Stock release for every line must happen *before* calling this
        (coordinated by the application handler via the domain service).
        Re-cancelling is rejected because CANCELLED has no outgoing edges.
        """
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransitionError(self.status.value, OrderStatus.CANCELLED.value)
        self.transition_to(OrderStatus.CANCELLED)

    def reopen_for_payment(self) -> None:
        """Recovery path CANCELLED -> PAYMENT_PENDING.

        Stock must already have been re-reserved for every line.
        """
        if self.status != OrderStatus.CANCELLED:
            raise InvalidTransitionError(self.status.value, OrderStatus.PAYMENT_PENDING.value)
        self.status = OrderStatus.PAYMENT_PENDING
        self.payment_status = PaymentStatus.PENDING

    # --- Payment --------------------------------------------------------------

    def ensure_gateway_payment(self) -> None:
        if not self.payment_method.requires_gateway:
            raise ValidationError(f"Order {self.order_number} is not a gateway order")

    def mark_payment_pending(self, gateway_order_id: str) -> None:
        if self.status not in PAYABLE_STATUSES:
            raise InvalidTransitionError(self.status.value, OrderStatus.PAYMENT_PENDING.value)
        self.transition_to(OrderStatus.PAYMENT_PENDING)
        self.gateway_order_id = gateway_order_id
        self.payment_status = PaymentStatus.PENDING

    def mark_paid(self, gateway_order_id: str, payment_id: str, signature: str) -> None:
        """Record a verified payment and move to PAID in one step."""
        self.transition_to(OrderStatus.PAID)
        self.payment_status = PaymentStatus.PAID
        self.gateway_order_id = gateway_order_id
        self.payment_id = payment_id
        self.payment_signature = signature

    def mark_payment_failed(self) -> None:
        """Fail closed: payment status only, lifecycle state untouched."""
        self.payment_status = PaymentStatus.FAILED

    # --- History --------------------------------------------------------------

    def hide_for_user(self) -> bool:
        """Soft-delete from the user's history.  Returns False if already hidden."""
        if self.hidden_for_user:
            return False
        self.hidden_for_user = True
        return True

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        return Money.total(item.subtotal for item in self.items)

    @property
    def total_amount(self) -> Money:
        return self.items_total + self.delivery_charge

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self.status]
