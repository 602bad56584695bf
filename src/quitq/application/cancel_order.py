"""Application service: Cancel Order use case.

Shorthand for a transition to CANCELLED.  Only PLACED orders can be
cancelled; cancelling twice is a failure, never a silent no-op.
"""

from __future__ import annotations

from returns.result import Result

from quitq.application.dto import OrderDTO
from quitq.application.result import CoreError
from quitq.application.transition_order import TransitionOrderHandler
from quitq.domain.model.order import Order, OrderStatus


class CancelOrderHandler(TransitionOrderHandler):

    operation = "cancel_order"

    def handle(  # type: ignore[override]
        self, order_id: int
    ) -> Result[OrderDTO, CoreError]:
        return super().handle(order_id, OrderStatus.CANCELLED)

    def _apply(self, order: Order, target: OrderStatus) -> None:
        order.cancel()
