"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.

Stock counters live on products and variants and are shared by every
order, so the repository exposes conditional single-document updates
for them rather than relying on a read-then-save from the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalogue."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new product, or replace a stored one whole."""

    @abstractmethod
    def update(self, product_id: str, change: Callable[[Product], None]) -> Product | None:
        """Apply ``change`` to the latest stored product and persist it.

        Load, change and write happen as one step, so catalogue edits never
        overwrite a stock movement committed after the caller's last read.
        Returns None, without writing, when the product does not exist.
        """

    @abstractmethod
    def decrement_stock(self, product_id: str, variant_id: str | None, quantity: int) -> bool:
        """Atomically take ``quantity`` units if that many are available.

        Returns False, without writing, when the counter is too low.
        Untracked variants always succeed without writing.
        """

    @abstractmethod
    def increment_stock(self, product_id: str, variant_id: str | None, quantity: int) -> None:
        """Atomically add ``quantity`` units back to the counter."""
