"""Domain service: Stock Reservation.

This service owns the rule for when stock counters move:

* decremented exactly once per line when an order is created (or when a
  cancelled order is re-reserved for a fresh payment attempt);
* incremented exactly once per line when the order is cancelled.

Lines are handled one at a time.  Each line re-reads its product right
before deciding, and the write itself is the repository's conditional
decrement, so a concurrent writer can make us fail but never drive a
counter below zero.  With ``reserve_lines`` a failure on a later line does
not undo the decrements already applied to earlier lines; ``reserve_all``
gives them back before re-raising.
"""

from __future__ import annotations

import logging
from typing import Iterable

from storefront.domain.exceptions import DomainException, EntityNotFoundError, InsufficientStockError
from storefront.domain.model.order import OrderLine
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve_line(self, product_id: str, variant_id: str | None, quantity: int) -> None:
        """Take ``quantity`` units for one line or raise InsufficientStockError."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")

        source = product.line_source(variant_id)
        if not source.is_tracked:
            return
        source.ensure_available(quantity)

        if not self._product_repo.decrement_stock(product_id, variant_id, quantity):
            # Lost a race between our read and the conditional write.
            latest = self._product_repo.get_by_id(product_id)
            available = latest.line_source(variant_id).available if latest else 0
            raise InsufficientStockError(source.display_name, quantity, available or 0)

        logger.info(
            "stock reserved",
            extra={"product_id": product_id, "variant_id": variant_id, "quantity": quantity},
        )

    def reserve_lines(self, lines: Iterable[OrderLine]) -> None:
        """Reserve every line in order, failing fast on the first shortfall."""
        for line in lines:
            self.reserve_line(line.product_id, line.variant_id, line.quantity.value)

    def reserve_all(self, lines: Iterable[OrderLine]) -> None:
        """Reserve every line or none of them."""
        taken: list[OrderLine] = []
        try:
            for line in lines:
                self.reserve_line(line.product_id, line.variant_id, line.quantity.value)
                taken.append(line)
        except DomainException:
            self.release_lines(taken)
            raise

    def release_lines(self, lines: Iterable[OrderLine]) -> None:
        """Return every line's quantity to the counter it was taken from.

        Products that no longer exist are skipped with a warning; there is
        nothing left to give the stock back to.
        """
        for line in lines:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                logger.warning(
                    "stock release skipped, product missing",
                    extra={"product_id": line.product_id},
                )
                continue
            self._product_repo.increment_stock(
                line.product_id, line.variant_id, line.quantity.value
            )
            logger.info(
                "stock released",
                extra={
                    "product_id": line.product_id,
                    "variant_id": line.variant_id,
                    "quantity": line.quantity.value,
                },
            )
