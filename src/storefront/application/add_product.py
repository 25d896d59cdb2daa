"""Application service: Add Product use case."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class VariantSpec:
    label: str
    price: str
    stock: int | None = None


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, name: str, price: str, stock: int = 0,
               variants: list[VariantSpec] | None = None) -> Product:
        """Add a new product to the catalogue."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        existing = self._product_repo.get_by_name(name)
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            price=Money.of(price),
            stock=stock,
            variants=[
                Variant(
                    id=f"{next_id}-{index}",
                    label=spec.label.strip(),
                    price=Money.of(spec.price),
                    stock=spec.stock,
                )
                for index, spec in enumerate(variants or [], start=1)
            ],
        )
        self._product_repo.save(product)
        return product
