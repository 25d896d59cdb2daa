"""Ports for collaborators that live outside this core.

The payment gateway and the notification channel are reached only
through these interfaces; adapters live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


@dataclass(frozen=True)
class GatewayOrder:
    """The gateway's handle for a payment intent."""

    id: str
    amount: int  # minor units
    currency: str


class PaymentGateway(ABC):

    @abstractmethod
    def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        """Open a payment intent for ``amount`` minor units."""


class OrderEventType(Enum):
    ORDER_PLACED = "order_placed"
    PAYMENT_RECEIVED = "payment_received"
    ORDER_CANCELLED = "order_cancelled"


@dataclass(frozen=True)
class OrderEvent:
    type: OrderEventType
    order_id: int
    order_number: str
    user_id: str
    total_amount: str
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationDispatcher(ABC):

    @abstractmethod
    def dispatch(self, event: OrderEvent) -> None:
        """Hand an event to the notification channel."""
