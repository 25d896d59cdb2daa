"""Application service: Set Inventory use case (administrative stock count)."""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SetInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, quantity: int, variant_id: str | None = None) -> None:
        """Overwrite the stock counter of a product or one of its variants."""
        product = self._product_repo.update(
            product_id, lambda p: p.set_stock(quantity, variant_id)
        )
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")

        logger.info(
            "stock set",
            extra={"product_id": product_id, "variant_id": variant_id, "quantity": quantity},
        )
