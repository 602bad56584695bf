"""Application service: List a user's orders (query).

A user with no orders gets an empty list, not a failure.
"""

from __future__ import annotations

from quitq.application.dto import OrderDTO, order_to_dto
from quitq.domain.repository.unit_of_work import UnitOfWork


class ListUserOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> list[OrderDTO]:
        with self._uow:
            orders = self._uow.orders.list_for_user(user_id)
        return [order_to_dto(order) for order in orders]
