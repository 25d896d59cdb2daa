"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, user_id: str) -> CartDTO:
        """Return the user's cart, creating an empty one on first access."""
        cart = self._cart_repo.get_for_user(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
            self._cart_repo.save(cart)
        return cart_to_dto(cart)
