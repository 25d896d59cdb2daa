"""JSON-file-backed implementation of CartRepository with version checks."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ConcurrentModificationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_store import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_for_user(self, user_id: str) -> Cart | None:
        for raw in self._file.load():
            if raw["user_id"] == user_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        with self._file.lock:
            carts = self._file.load()
            index = next(
                (i for i, raw in enumerate(carts) if raw["user_id"] == cart.user_id), None
            )
            stored_version = carts[index]["version"] if index is not None else 0
            if stored_version != cart.version:
                raise ConcurrentModificationError(
                    f"Cart for user '{cart.user_id}' changed since it was read "
                    f"(stored version {stored_version}, read version {cart.version})"
                )

            cart.version += 1
            if index is None:
                carts.append(self._to_raw(cart))
            else:
                carts[index] = self._to_raw(cart)
            self._file.persist(carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "user_id": cart.user_id,
            "version": cart.version,
            "total_amount": str(cart.total_amount.amount),
            "items": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "variant_id": line.variant_id,
                    "variant_label": line.variant_label,
                    "quantity": line.quantity,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                }
                for line in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            user_id=raw["user_id"],
            version=raw.get("version", 0),
            items=[
                CartLine(
                    product_id=i["product_id"],
                    product_name=i["product_name"],
                    quantity=i["quantity"],
                    unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "INR")),
                    variant_id=i.get("variant_id"),
                    variant_label=i.get("variant_label", ""),
                )
                for i in raw["items"]
            ],
        )
