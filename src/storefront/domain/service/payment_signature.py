"""Domain service: gateway payment signature checks.

The gateway signs ``<gateway order id>|<payment id>`` with the merchant
secret (HMAC-SHA256, hex digest).  Verification happens locally; the
gateway is never called back to confirm a payment.
"""

from __future__ import annotations

import hashlib
import hmac


class PaymentSignatureVerifier:

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("Payment gateway secret is not configured")
        self._secret = secret.encode("utf-8")

    def sign(self, gateway_order_id: str, payment_id: str) -> str:
        body = f"{gateway_order_id}|{payment_id}".encode("utf-8")
        return hmac.new(self._secret, body, hashlib.sha256).hexdigest()

    def verify(self, gateway_order_id: str, payment_id: str, signature: str) -> bool:
        expected = self.sign(gateway_order_id, payment_id)
        return hmac.compare_digest(expected, signature or "")
