"""Application services: cart mutations.

Every mutation reads the cart, applies one logical change and saves it
with an optimistic version check.  When another writer saved the cart in
between (two browser tabs adding items at once), the whole read-apply-save
cycle is repeated with a fresh read, up to ``MAX_ATTEMPTS`` times.

Stock is only *checked* here, against the product as it is right now.
Nothing is held; order creation re-checks authoritatively.
"""

from __future__ import annotations

import logging
from typing import Callable

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.inventory import StockSource
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


class _CartMutationHandler:

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def _mutate(
        self,
        user_id: str,
        mutation: Callable[[Cart], None],
        create_missing: bool = False,
    ) -> Cart:
        for attempt in range(1, MAX_ATTEMPTS + 1):
            cart = self._cart_repo.get_for_user(user_id)
            if cart is None:
                if not create_missing:
                    raise EntityNotFoundError("Cart not found")
                cart = Cart(user_id=user_id)

            mutation(cart)

            try:
                self._cart_repo.save(cart)
                return cart
            except ConcurrentModificationError:
                logger.warning(
                    "cart save conflict",
                    extra={"user_id": user_id, "attempt": attempt},
                )

        raise ConcurrentModificationError(
            f"Cart for user '{user_id}' was modified concurrently; "
            f"gave up after {MAX_ATTEMPTS} attempts"
        )

    def _stock_source(self, product_id: str, variant_id: str | None) -> StockSource:
        if not product_id:
            raise ValidationError("Product ID is required")
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")
        return product.stock_source(variant_id)


class AddToCartHandler(_CartMutationHandler):

    def handle(self, user_id: str, product_id: str, quantity: int = 1,
               variant_id: str | None = None) -> CartDTO:
        def apply(cart: Cart) -> None:
            # Re-read the product on every attempt so the check sees current stock.
            cart.add(self._stock_source(product_id, variant_id), quantity)

        return cart_to_dto(self._mutate(user_id, apply, create_missing=True))


class SetCartQuantityHandler(_CartMutationHandler):

    def handle(self, user_id: str, product_id: str, quantity: int,
               variant_id: str | None = None) -> CartDTO:
        """Set a line's quantity; zero removes the line."""
        if not product_id or quantity < 0:
            raise ValidationError("Valid product ID and quantity are required")

        def apply(cart: Cart) -> None:
            source = self._stock_source(product_id, variant_id) if quantity > 0 else None
            cart.set_quantity(source, product_id, variant_id, quantity)

        return cart_to_dto(self._mutate(user_id, apply))


class RemoveFromCartHandler(_CartMutationHandler):

    def handle(self, user_id: str, product_id: str, variant_id: str | None = None) -> CartDTO:
        return cart_to_dto(
            self._mutate(user_id, lambda cart: cart.remove(product_id, variant_id))
        )


class ClearCartHandler(_CartMutationHandler):

    def handle(self, user_id: str) -> CartDTO:
        return cart_to_dto(self._mutate(user_id, lambda cart: cart.clear()))
