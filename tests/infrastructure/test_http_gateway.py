"""Tests for the HTTP payment gateway adapter.

``httpx.Client.post`` is monkeypatched so no network traffic happens.
"""

import httpx
import pytest

from storefront.infrastructure.payments.http_gateway import GatewayError, HttpPaymentGateway

URL = "https://gateway.test/v1/orders"


def _response(status_code: int, json_data: dict) -> httpx.Response:
    return httpx.Response(status_code, json=json_data, request=httpx.Request("POST", URL))


class TestHttpPaymentGateway:

    def test_create_order_ok(self, monkeypatch):
        seen = {}

        def fake_post(self, url, json=None, **kw):
            seen["url"] = url
            seen["json"] = json
            return _response(200, {"id": "order_abc", "amount": json["amount"], "currency": "INR"})

        monkeypatch.setattr(httpx.Client, "post", fake_post, raising=True)
        gateway = HttpPaymentGateway("https://gateway.test/", "key", "secret")

        result = gateway.create_order(24100, "INR", "ORD-1-ABCDE")

        assert result.id == "order_abc"
        assert result.amount == 24100
        assert seen["url"] == URL
        assert seen["json"] == {"amount": 24100, "currency": "INR", "receipt": "ORD-1-ABCDE"}

    def test_rejection_becomes_gateway_error(self, monkeypatch):
        monkeypatch.setattr(
            httpx.Client, "post", lambda self, url, json=None, **kw: _response(401, {"error": "auth"})
        )
        with pytest.raises(GatewayError, match="rejected the order \\(401\\)") as exc_info:
            HttpPaymentGateway("https://gateway.test", "key", "bad").create_order(100, "INR", "r")
        assert exc_info.value.code == "GATEWAY_ERROR"

    def test_network_error_becomes_gateway_error(self, monkeypatch):
        def fake_post(self, url, json=None, **kw):
            raise httpx.ConnectError("boom")

        monkeypatch.setattr(httpx.Client, "post", fake_post)
        with pytest.raises(GatewayError, match="unreachable"):
            HttpPaymentGateway("https://gateway.test", "key", "secret").create_order(100, "INR", "r")

    def test_missing_order_id(self, monkeypatch):
        monkeypatch.setattr(httpx.Client, "post", lambda self, url, json=None, **kw: _response(200, {}))
        with pytest.raises(GatewayError, match="did not include an order id"):
            HttpPaymentGateway("https://gateway.test", "key", "secret").create_order(100, "INR", "r")
