"""Application service: open a gateway payment for an existing order.

Allowed from CREATED, PAYMENT_PENDING and, as a recovery path, from
CANCELLED.  A cancelled order gave its stock back, so it must reserve it
again before it can be paid for.  If any line is now short, the lines
already taken are given back and the order stays CANCELLED.  The
reopened order is saved before the gateway is called, so a gateway
outage leaves a PAYMENT_PENDING order that holds its stock rather than
a cancelled one that silently holds it.
"""

from __future__ import annotations

import logging

from storefront.application.dto import PaymentIntentDTO
from storefront.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from storefront.domain.model.order import PAYABLE_STATUSES, OrderStatus
from storefront.domain.ports import PaymentGateway
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_reservation_service import StockReservationService

logger = logging.getLogger(__name__)


class CreatePaymentIntentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        gateway: PaymentGateway,
        currency: str = "INR",
        key_id: str | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._gateway = gateway
        self._currency = currency
        self._key_id = key_id

    def handle(self, user_id: str, order_id: int) -> PaymentIntentDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None or order.user_id != user_id:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.ensure_gateway_payment()
        if order.status not in PAYABLE_STATUSES:
            raise InvalidTransitionError(order.status.value, OrderStatus.PAYMENT_PENDING.value)

        if order.status == OrderStatus.CANCELLED:
            StockReservationService(self._product_repo).reserve_all(order.items)
            order.reopen_for_payment()
            self._order_repo.save(order)
            logger.info(
                "cancelled order reopened for payment",
                extra={"order_number": order.order_number},
            )

        gateway_order = self._gateway.create_order(
            amount=order.total_amount.to_minor_units(),
            currency=self._currency,
            receipt=order.order_number,
        )

        order.mark_payment_pending(gateway_order.id)
        self._order_repo.save(order)
        logger.info(
            "payment intent created",
            extra={
                "order_number": order.order_number,
                "gateway_order_id": gateway_order.id,
                "amount": gateway_order.amount,
            },
        )

        return PaymentIntentDTO(
            order_id=order.id,  # type: ignore[arg-type]
            gateway_order_id=gateway_order.id,
            amount=gateway_order.amount,
            currency=gateway_order.currency,
            key_id=self._key_id,
        )
