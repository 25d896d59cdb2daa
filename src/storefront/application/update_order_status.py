"""Application service: administrative status update.

Accepts canonical or legacy status names, translates them once here and
then works with the enum only.  Moving to CANCELLED goes through the
cancel use case so stock is released.  PAYMENT_PENDING and PAID are set
only by payment reconciliation, never by hand.
"""

from __future__ import annotations

import logging

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from storefront.domain.model.order import OrderStatus
from storefront.domain.ports import NotificationDispatcher
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

PAYMENT_OWNED_STATUSES = frozenset({OrderStatus.PAYMENT_PENDING, OrderStatus.PAID})


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        notifier: NotificationDispatcher | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._cancel = CancelOrderHandler(order_repo, product_repo, notifier)

    def handle(self, order_id: int, status: str) -> OrderDTO:
        target = OrderStatus.parse(status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if target in PAYMENT_OWNED_STATUSES:
            raise InvalidTransitionError(order.status.value, target.value)

        if target == OrderStatus.CANCELLED and order.status != OrderStatus.CANCELLED:
            self._cancel.cancel(order)
            return order_to_dto(order)

        previous = order.status
        order.transition_to(target)
        if order.status != previous:
            self._order_repo.save(order)
            logger.info(
                "order status updated",
                extra={
                    "order_number": order.order_number,
                    "from_status": previous.value,
                    "to_status": order.status.value,
                },
            )
        return order_to_dto(order)
