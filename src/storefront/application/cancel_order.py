"""Application service: Cancel Order use case.

Cancelling releases the stock held by every line of the order, then
persists the CANCELLED state.  The transition is checked *before* any
stock moves, so cancelling an already-cancelled order is rejected
without releasing its stock a second time.

Customers may only cancel before the order is paid for; administrators
may cancel from any state the transition table allows.
"""

from __future__ import annotations

import logging

from storefront.application import side_effects
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from storefront.domain.model.order import Order, OrderStatus, USER_CANCELLABLE_STATUSES
from storefront.domain.ports import NotificationDispatcher, OrderEventType
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import StockReservationService

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        notifier: NotificationDispatcher | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._notifier = notifier

    def handle(self, order_id: int, user_id: str | None = None) -> OrderDTO:
        """Cancel an order.

        Args:
            order_id: The order to cancel.
            user_id: The requesting customer.  ``None`` means an
                administrator is acting, which lifts the pre-payment limit.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None or (user_id is not None and order.user_id != user_id):
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if user_id is not None and order.status not in USER_CANCELLABLE_STATUSES:
            raise InvalidTransitionError(order.status.value, OrderStatus.CANCELLED.value)

        self.cancel(order)
        return order_to_dto(order)

    def cancel(self, order: Order) -> None:
        """Release stock, transition and persist an already-loaded order."""
        if order.status == OrderStatus.CANCELLED:
            raise InvalidTransitionError(order.status.value, OrderStatus.CANCELLED.value)
        order.ensure_can_transition_to(OrderStatus.CANCELLED)

        StockReservationService(self._product_repo).release_lines(order.items)

        order.cancel()
        self._order_repo.save(order)
        logger.info(
            "order cancelled",
            extra={"order_number": order.order_number, "user_id": order.user_id},
        )

        side_effects.notify(self._notifier, OrderEventType.ORDER_CANCELLED, order)
