"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Callable

from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_store import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._file.lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def update(self, product_id: str, change: Callable[[Product], None]) -> Product | None:
        with self._file.lock:
            products = self._load()
            product = products.get(product_id)
            if product is None:
                return None
            change(product)
            self._persist(products)
            return product

    def decrement_stock(self, product_id: str, variant_id: str | None, quantity: int) -> bool:
        with self._file.lock:
            products = self._load()
            product = products.get(product_id)
            if product is None:
                return False
            source = product.line_source(variant_id)
            if not source.is_tracked:
                return True
            if source.available < quantity:
                return False
            source.take(quantity)
            self._persist(products)
            return True

    def increment_stock(self, product_id: str, variant_id: str | None, quantity: int) -> None:
        with self._file.lock:
            products = self._load()
            product = products.get(product_id)
            if product is None:
                return
            product.line_source(variant_id).put_back(quantity)
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {item["id"]: self._to_domain(item) for item in self._file.load()}

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist([self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "stock": product.stock,
            "is_active": product.is_active,
            "variants": [
                {
                    "id": v.id,
                    "label": v.label,
                    "price": str(v.price.amount),
                    "stock": v.stock,
                    "is_active": v.is_active,
                }
                for v in product.variants
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "INR")
        return Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), currency),
            stock=raw.get("stock", 0),
            is_active=raw.get("is_active", True),
            variants=[
                Variant(
                    id=v["id"],
                    label=v["label"],
                    price=Money(Decimal(v["price"]), currency),
                    stock=v.get("stock"),
                    is_active=v.get("is_active", True),
                )
                for v in raw.get("variants", [])
            ],
        )
