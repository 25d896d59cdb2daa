"""StockSource — the counter a cart or order line draws its stock from.

A line either draws from an active variant's own counter or from the
base product counter.  An active variant whose stock is ``None`` is not
tracked at all and never constrains or moves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from storefront.domain.exceptions import InsufficientStockError, ValidationError

if TYPE_CHECKING:
    from storefront.domain.model.product import Product, Variant
    from storefront.domain.model.value_objects import Money


@dataclass
class StockSource:
    """Resolved (product, variant-or-None) pair.

    Invariants:
    - a tracked counter is never taken below zero
    - untracked variants ignore ``take`` and ``put_back``
    """

    product: Product
    variant: Variant | None = None

    @property
    def variant_id(self) -> str | None:
        return self.variant.id if self.variant else None

    @property
    def label(self) -> str:
        return self.variant.label if self.variant else ""

    @property
    def unit_price(self) -> Money:
        return self.variant.price if self.variant else self.product.price

    @property
    def display_name(self) -> str:
        """Product name with the variant label, e.g. ``Rice (5 kg)``."""
        if self.label:
            return f"{self.product.name} ({self.label})"
        return self.product.name

    @property
    def is_tracked(self) -> bool:
        return self.variant is None or self.variant.stock is not None

    @property
    def available(self) -> int | None:
        """Units on hand, or None when the counter is untracked."""
        if self.variant is not None:
            return self.variant.stock
        return self.product.stock

    def ensure_available(self, quantity: int) -> None:
        """Raise InsufficientStockError if ``quantity`` cannot be met."""
        available = self.available
        if available is not None and quantity > available:
            raise InsufficientStockError(self.display_name, quantity, available)

    def take(self, quantity: int) -> None:
        """Decrement the counter by ``quantity``."""
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if not self.is_tracked:
            return
        self.ensure_available(quantity)
        if self.variant is not None:
            self.variant.stock -= quantity
        else:
            self.product.stock -= quantity

    def put_back(self, quantity: int) -> None:
        """Increment the counter by ``quantity`` (release of a hold)."""
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        if not self.is_tracked:
            return
        if self.variant is not None:
            self.variant.stock += quantity
        else:
            self.product.stock += quantity
