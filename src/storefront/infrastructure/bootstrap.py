"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Configuration is read
from the environment on every call so tests can point it elsewhere.
"""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.service.payment_signature import PaymentSignatureVerifier
from storefront.infrastructure.config import AppConfig
from storefront.infrastructure.notifications.outbox import OutboxNotificationDispatcher
from storefront.infrastructure.payments.http_gateway import HttpPaymentGateway
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import JsonProductRepository
from storefront.infrastructure.persistence.json_settings_repository import JsonSettingsRepository


def config() -> AppConfig:
    return AppConfig.from_env()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(config().data_dir / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(config().data_dir / "orders.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(config().data_dir / "carts.json")


def settings_repository() -> JsonSettingsRepository:
    return JsonSettingsRepository(config().data_dir / "settings.json")


def notification_dispatcher() -> OutboxNotificationDispatcher:
    return OutboxNotificationDispatcher(config().data_dir / "outbox.jsonl")


def payment_gateway() -> HttpPaymentGateway:
    cfg = config()
    if not cfg.gateway_key_id or not cfg.gateway_key_secret:
        raise ValidationError("Payment gateway is not configured on server")
    return HttpPaymentGateway(
        base_url=cfg.gateway_base_url,
        key_id=cfg.gateway_key_id,
        key_secret=cfg.gateway_key_secret,
        timeout=cfg.gateway_timeout_secs,
    )


def signature_verifier() -> PaymentSignatureVerifier:
    secret = config().gateway_key_secret
    if not secret:
        raise ValidationError("Payment gateway is not configured on server")
    return PaymentSignatureVerifier(secret)
