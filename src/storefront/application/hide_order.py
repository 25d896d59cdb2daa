"""Application service: remove orders from a user's history.

This is a soft delete: the order record, its stock effects and its
lifecycle state are untouched, it is only hidden from the user's list.
"""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


class HideOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str, order_id: int) -> bool:
        """Hide one order.  Returns False if it was already hidden."""
        order = self._order_repo.get_by_id(order_id)
        if order is None or order.user_id != user_id:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        changed = order.hide_for_user()
        if changed:
            self._order_repo.save(order)
        return changed


class ClearOrderHistoryHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str) -> int:
        """Hide every visible order of the user; returns how many changed."""
        count = 0
        for order in self._order_repo.list_for_user(user_id):
            if order.hide_for_user():
                self._order_repo.save(order)
                count += 1
        return count
