"""Application service: Show Order use cases (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, user_id: str | None = None) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None or (user_id is not None and order.user_id != user_id):
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str) -> list[OrderDTO]:
        """The user's visible order history, newest first."""
        orders = [o for o in self._order_repo.list_for_user(user_id) if not o.hidden_for_user]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [order_to_dto(o) for o in orders]
