"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class StockLineDTO:
    product_id: str
    variant_id: str | None
    name: str
    price: str
    stock: int | None  # None = not tracked
    active: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[StockLineDTO]:
        lines: list[StockLineDTO] = []
        for product in self._product_repo.list_all():
            lines.append(
                StockLineDTO(
                    product_id=product.id,
                    variant_id=None,
                    name=product.name,
                    price=str(product.price),
                    stock=product.stock,
                    active=product.is_active,
                )
            )
            for variant in product.variants:
                lines.append(
                    StockLineDTO(
                        product_id=product.id,
                        variant_id=variant.id,
                        name=f"{product.name} ({variant.label})",
                        price=str(variant.price),
                        stock=variant.stock,
                        active=variant.is_active,
                    )
                )
        return lines
