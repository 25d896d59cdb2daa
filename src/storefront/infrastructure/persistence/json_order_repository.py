"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
)
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_store import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_for_user(self, user_id: str) -> list[Order]:
        return [self._to_domain(raw) for raw in self._file.load() if raw["user_id"] == user_id]

    def save(self, order: Order) -> None:
        with self._file.lock:
            orders = self._file.load()

            if order.id is None:
                order.id = self.next_id()

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    replaced = True
                    break
            if not replaced:
                orders.append(self._to_raw(order))

            self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        address = order.shipping_address
        return {
            "id": order.id,
            "user_id": order.user_id,
            "order_number": order.order_number,
            "status": order.status.value,
            "payment_method": order.payment_method.value,
            "payment_status": order.payment_status.value,
            "delivery_charge": str(order.delivery_charge.amount),
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "gateway_order_id": order.gateway_order_id,
            "payment_id": order.payment_id,
            "payment_signature": order.payment_signature,
            "hidden_for_user": order.hidden_for_user,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "shipping_address": {
                "name": address.name,
                "street": address.street,
                "city": address.city,
                "state": address.state,
                "zip_code": address.zip_code,
                "country": address.country,
                "phone": address.phone,
            },
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "variant_id": item.variant_id,
                    "variant_label": item.variant_label,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "subtotal": str(item.subtotal.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "INR")
        items = [
            OrderLine(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
                variant_id=i.get("variant_id"),
                variant_label=i.get("variant_label", ""),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            order_number=raw["order_number"],
            items=items,
            payment_method=PaymentMethod(raw["payment_method"]),
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            delivery_charge=Money(Decimal(raw.get("delivery_charge", "0")), currency),
            # Older records may carry lowercase legacy statuses.
            status=OrderStatus.parse(raw["status"]),
            payment_status=PaymentStatus(raw.get("payment_status", "pending")),
            gateway_order_id=raw.get("gateway_order_id"),
            payment_id=raw.get("payment_id"),
            payment_signature=raw.get("payment_signature"),
            hidden_for_user=raw.get("hidden_for_user", False),
            notes=raw.get("notes", ""),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
