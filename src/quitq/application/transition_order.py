"""Application service: move an order along the status state machine.

The order row is locked for the duration of the transaction and its version
is checked on write, so two concurrent transitions on the same order cannot
both succeed: the loser gets an INVALID_STATE failure (it saw the new
status) or a CONFLICT failure (it lost the version race).
"""

from __future__ import annotations

import logging

from returns.result import Result, Success

from quitq.application.dto import OrderDTO, order_to_dto
from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import DomainException, EntityNotFoundError
from quitq.domain.model.order import Order, OrderStatus
from quitq.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class TransitionOrderHandler:

    operation = "transition_order"

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, target: OrderStatus) -> Result[OrderDTO, CoreError]:
        try:
            with self._uow:
                order = self._uow.orders.get_by_id(order_id, for_update=True)
                if order is None:
                    raise EntityNotFoundError("Order not found")

                previous = order.status
                self._apply(order, target)
                self._uow.orders.update_status(order)
                self._uow.commit()
        except DomainException as exc:
            return fail(self.operation, exc)

        logger.info(
            "Order #%s moved %s -> %s",
            order.id,
            previous.name,
            order.status.name,
            extra={"operation": self.operation, "status": order.status.name},
        )
        return Success(order_to_dto(order))

    def _apply(self, order: Order, target: OrderStatus) -> None:
        order.transition_to(target)
