"""Application service: reconcile a gateway payment callback.

The client submits the gateway's order id, payment id and signature.
We recompute the signature locally; on any mismatch the order's payment
status becomes ``failed`` and its lifecycle state is left alone.  Only a
valid signature moves the order to PAID.  Nothing here is retried; the
client has to resubmit corrected data.
"""

from __future__ import annotations

import logging

from storefront.application import side_effects
from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InvalidPaymentSignatureError,
    ValidationError,
)
from storefront.domain.ports import NotificationDispatcher, OrderEventType
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.payment_signature import PaymentSignatureVerifier

logger = logging.getLogger(__name__)


class VerifyPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        verifier: PaymentSignatureVerifier,
        cart_repo: CartRepository | None = None,
        notifier: NotificationDispatcher | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._verifier = verifier
        self._cart_repo = cart_repo
        self._notifier = notifier

    def handle(
        self,
        user_id: str,
        order_id: int | None,
        gateway_order_id: str,
        payment_id: str,
        signature: str,
    ) -> OrderDTO:
        if not order_id or not gateway_order_id or not payment_id or not signature:
            raise ValidationError("Missing payment verification fields")

        order = self._order_repo.get_by_id(order_id)
        if order is None or order.user_id != user_id:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        order.ensure_gateway_payment()

        recorded = order.gateway_order_id
        matches_order = recorded is None or recorded == gateway_order_id
        if not matches_order or not self._verifier.verify(gateway_order_id, payment_id, signature):
            order.mark_payment_failed()
            self._order_repo.save(order)
            logger.warning(
                "payment verification failed",
                extra={"order_number": order.order_number, "gateway_order_id": gateway_order_id},
            )
            raise InvalidPaymentSignatureError("Invalid payment signature")

        order.mark_paid(gateway_order_id, payment_id, signature)
        self._order_repo.save(order)
        logger.info(
            "payment verified",
            extra={"order_number": order.order_number, "payment_id": payment_id},
        )

        side_effects.clear_cart(self._cart_repo, order.user_id)
        side_effects.notify(self._notifier, OrderEventType.PAYMENT_RECEIVED, order)

        return order_to_dto(order)
