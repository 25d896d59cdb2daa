"""Best-effort follow-ups that must never fail the operation they follow.

Order creation, payment and cancellation are complete once the order is
saved.  Notifying the customer and emptying their cart happen afterwards;
a failure there is logged and otherwise ignored.
"""

from __future__ import annotations

import logging

from storefront.domain.model.order import Order
from storefront.domain.ports import NotificationDispatcher, OrderEvent, OrderEventType
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


def notify(dispatcher: NotificationDispatcher | None, event_type: OrderEventType, order: Order) -> None:
    if dispatcher is None:
        return
    event = OrderEvent(
        type=event_type,
        order_id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        user_id=order.user_id,
        total_amount=str(order.total_amount.amount),
    )
    try:
        dispatcher.dispatch(event)
    except Exception:
        logger.exception(
            "notification failed",
            extra={"event": event_type.value, "order_number": order.order_number},
        )


def clear_cart(cart_repo: CartRepository | None, user_id: str) -> None:
    if cart_repo is None:
        return
    try:
        cart = cart_repo.get_for_user(user_id)
        if cart is None or cart.is_empty:
            return
        cart.clear()
        cart_repo.save(cart)
    except Exception:
        logger.exception("cart clear failed", extra={"user_id": user_id})
