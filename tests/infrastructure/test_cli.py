"""End-to-end CLI tests against a temporary data directory."""

import json

import httpx
import pytest
from click.testing import CliRunner

from storefront.domain.service.payment_signature import PaymentSignatureVerifier
from storefront.infrastructure.cli.main import cli

ADDRESS = ["--name", "Asha", "--street", "12 MG Road", "--city", "Pune"]


@pytest.fixture
def runner(monkeypatch, tmp_path):
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("GATEWAY_BASE_URL", "https://gateway.test")
    monkeypatch.setenv("GATEWAY_KEY_ID", "rzp_test")
    monkeypatch.setenv("GATEWAY_KEY_SECRET", "s3cret")
    return CliRunner()


def _invoke(runner, *args):
    return runner.invoke(cli, list(args))


def _seed(runner):
    result = _invoke(runner, "product", "add", "--name", "Rice", "--price", "60", "--stock", "5",
                     "--variant", "5 kg:280:2")
    assert result.exit_code == 0, result.output
    return result


class TestProductAndInventory:

    def test_add_product_with_variant(self, runner):
        result = _seed(runner)
        assert "Product #1 'Rice' added" in result.output
        assert "variant 1-1: 5 kg" in result.output

    def test_inventory_set_and_show(self, runner):
        _seed(runner)
        assert _invoke(runner, "inventory", "set", "--product", "1", "--variant", "1-1",
                       "--quantity", "9").exit_code == 0
        result = _invoke(runner, "inventory", "show")
        assert "Rice (5 kg)" in result.output
        assert "9" in result.output

    def test_unknown_product_reports_code(self, runner):
        result = _invoke(runner, "inventory", "set", "--product", "9", "--quantity", "1")
        assert result.exit_code != 0
        assert "[NOT_FOUND]" in result.output


class TestOrderFlow:

    def test_cart_to_cod_order_and_cancel(self, runner, tmp_path):
        _seed(runner)
        assert _invoke(runner, "cart", "add", "--user", "u1", "--product", "1", "--quantity", "2").exit_code == 0

        created = _invoke(runner, "order", "create", "--user", "u1", "--payment", "cod", *ADDRESS)
        assert created.exit_code == 0, created.output
        assert "status=CREATED" in created.output

        products = json.loads((tmp_path / "products.json").read_text())
        assert products[0]["stock"] == 3
        assert "Cart is empty." in _invoke(runner, "cart", "show", "--user", "u1").output

        cancelled = _invoke(runner, "order", "cancel", "--id", "1", "--user", "u1")
        assert cancelled.exit_code == 0
        products = json.loads((tmp_path / "products.json").read_text())
        assert products[0]["stock"] == 5

        again = _invoke(runner, "order", "cancel", "--id", "1", "--user", "u1")
        assert "[INVALID_TRANSITION]" in again.output

        outbox = (tmp_path / "outbox.jsonl").read_text().splitlines()
        assert [json.loads(line)["type"] for line in outbox] == ["order_placed", "order_cancelled"]

    def test_insufficient_stock(self, runner):
        _seed(runner)
        result = _invoke(runner, "order", "create", "--user", "u1", "--items", "1/1-1:3",
                         "--payment", "cod", *ADDRESS)
        assert result.exit_code != 0
        assert "[INSUFFICIENT_STOCK]" in result.output

    def test_delivery_charge_from_settings(self, runner):
        _seed(runner)
        assert _invoke(runner, "settings", "init").exit_code == 0
        result = _invoke(runner, "order", "create", "--user", "u1", "--items", "1:1",
                         "--payment", "cod", "--distance", "7", *ADDRESS)
        assert "₹80.00" in result.output
        assert "₹140.00" in result.output

    def test_admin_status_walk_and_history(self, runner):
        _seed(runner)
        _invoke(runner, "order", "create", "--user", "u1", "--items", "1:1", "--payment", "cod", *ADDRESS)
        assert "ADMIN_CONFIRMED" in _invoke(runner, "order", "set-status", "--id", "1", "--status", "confirmed").output
        bad = _invoke(runner, "order", "set-status", "--id", "1", "--status", "DELIVERED")
        assert "[INVALID_TRANSITION]" in bad.output

        assert "ORD-" in _invoke(runner, "order", "list", "--user", "u1").output
        _invoke(runner, "order", "hide", "--id", "1", "--user", "u1")
        assert "No orders found." in _invoke(runner, "order", "list", "--user", "u1").output

    def test_gateway_payment(self, runner, monkeypatch):
        def fake_post(self, url, json=None, **kw):
            return httpx.Response(
                200,
                json={"id": "order_gw1", "amount": json["amount"], "currency": "INR"},
                request=httpx.Request("POST", url),
            )

        monkeypatch.setattr(httpx.Client, "post", fake_post)
        _seed(runner)
        _invoke(runner, "order", "create", "--user", "u1", "--items", "1:2", "--payment", "gateway", *ADDRESS)

        intent = _invoke(runner, "order", "pay", "--id", "1", "--user", "u1")
        assert intent.exit_code == 0, intent.output
        assert "order_gw1" in intent.output
        assert "12000" in intent.output

        bad = _invoke(runner, "order", "verify", "--id", "1", "--user", "u1",
                      "--gateway-order-id", "order_gw1", "--payment-id", "pay_1", "--signature", "x")
        assert "[INVALID_PAYMENT_SIGNATURE]" in bad.output

        signature = PaymentSignatureVerifier("s3cret").sign("order_gw1", "pay_1")
        ok = _invoke(runner, "order", "verify", "--id", "1", "--user", "u1",
                     "--gateway-order-id", "order_gw1", "--payment-id", "pay_1", "--signature", signature)
        assert ok.exit_code == 0, ok.output
        assert "is PAID" in ok.output

    def test_pay_without_gateway_keys(self, runner, monkeypatch):
        monkeypatch.delenv("GATEWAY_KEY_SECRET")
        _seed(runner)
        _invoke(runner, "order", "create", "--user", "u1", "--items", "1:1", "--payment", "gateway", *ADDRESS)
        result = _invoke(runner, "order", "pay", "--id", "1", "--user", "u1")
        assert "Payment gateway is not configured" in result.output
