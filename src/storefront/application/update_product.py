"""Application service: catalogue edits (price and availability).

Orders keep the price snapshot taken when they were placed and cart lines
keep the price captured when they were added, so nothing here reaches
into existing orders or carts.  Deactivating a variant only stops *new*
lines from using it; stock held by existing orders still returns to it
on cancellation.

Edits are applied through ``ProductRepository.update`` so they land on
the latest stored product and leave its stock counters alone.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        new_price: str | None = None,
        variant_id: str | None = None,
        active: bool | None = None,
    ) -> Product:
        if new_price is None and active is None:
            raise ValidationError("Nothing to update")
        price = Money.of(new_price) if new_price is not None else None

        def change(product: Product) -> None:
            if variant_id is None:
                if price is not None:
                    product.update_price(price)
                if active is not None:
                    product.is_active = active
                return

            variant = product.variant_by_id(variant_id)
            if variant is None:
                raise EntityNotFoundError(
                    f"Variant '{variant_id}' not found on product '{product.name}'"
                )
            if price is not None:
                if price.amount <= 0:
                    raise ValidationError("Variant price must be greater than zero")
                variant.price = price
            if active is not None:
                variant.is_active = active

        product = self._product_repo.update(product_id, change)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        logger.info(
            "product updated",
            extra={"product_id": product_id, "variant_id": variant_id, "active": active},
        )
        return product
