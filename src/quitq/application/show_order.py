"""Application service: Show Order use case (query)."""

from __future__ import annotations

from returns.result import Result, Success

from quitq.application.dto import OrderDTO, order_to_dto
from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import EntityNotFoundError
from quitq.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> Result[OrderDTO, CoreError]:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
        if order is None:
            return fail("show_order", EntityNotFoundError("Order not found"))
        return Success(order_to_dto(order))
