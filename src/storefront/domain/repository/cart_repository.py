"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_for_user(self, user_id: str) -> Cart | None:
        """Return the user's cart, or None if they never had one."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart if nobody else saved it since it was read.

        Raises ConcurrentModificationError when the stored version differs
        from ``cart.version``.  On success ``cart.version`` is bumped.
        """
