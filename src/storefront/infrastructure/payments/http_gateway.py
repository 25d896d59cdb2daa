"""HTTP adapter for the payment gateway's order API.

Talks to a Razorpay-compatible ``POST /v1/orders`` endpoint with basic
auth (key id / key secret) using ``httpx``.  Only intent creation goes
over the wire; payment verification is a local HMAC check.
"""

from __future__ import annotations

import logging

import httpx

from storefront.domain.exceptions import DomainException
from storefront.domain.ports import GatewayOrder, PaymentGateway

logger = logging.getLogger(__name__)


class GatewayError(DomainException):
    """The payment gateway could not be reached or refused the request."""

    code = "GATEWAY_ERROR"


class HttpPaymentGateway(PaymentGateway):

    def __init__(self, base_url: str, key_id: str, key_secret: str, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._auth = (key_id, key_secret)

    def create_order(self, amount: int, currency: str, receipt: str) -> GatewayOrder:
        """Create a gateway order for ``amount`` minor units.

        Raises:
            GatewayError: On transport errors, non-2xx responses or a
                response without an order id.
        """
        payload = {"amount": amount, "currency": currency, "receipt": receipt}
        try:
            with httpx.Client(timeout=self.timeout, auth=self._auth) as client:
                resp = client.post(f"{self.base_url}/v1/orders", json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "gateway rejected order",
                extra={"receipt": receipt, "status_code": exc.response.status_code},
            )
            raise GatewayError(f"Payment gateway rejected the order ({exc.response.status_code})") from exc
        except httpx.RequestError as exc:
            logger.error("gateway unreachable", extra={"receipt": receipt})
            raise GatewayError("Payment gateway is unreachable") from exc

        gateway_order_id = data.get("id")
        if not gateway_order_id:
            raise GatewayError("Payment gateway response did not include an order id")

        return GatewayOrder(
            id=gateway_order_id,
            amount=int(data.get("amount", amount)),
            currency=data.get("currency", currency),
        )
