"""Application service: Create Order use case.

Checkout in one transaction: read the user's cart, price every line through
the catalog, place the order and empty the cart.  Either all of it commits
or none of it does.
"""

from __future__ import annotations

import logging

from returns.result import Result, Success

from quitq.application.dto import OrderDTO, order_to_dto
from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import ConcurrencyConflictError, DomainException
from quitq.domain.model.order import Order
from quitq.domain.repository.unit_of_work import UnitOfWork
from quitq.domain.service.order_pricing_service import OrderPricingService

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str,
        shipping_address: str,
        payment_method: str,
    ) -> Result[OrderDTO, CoreError]:
        """Place an order from the user's cart.

        Steps:
        1. Read the cart (empty cart fails).
        2. Resolve each product and snapshot its *current* price.
        3. Let the Order aggregate compute the total and validate inputs.
        4. Persist order + items and remove the priced lines from the cart.
           If any of them is gone or has a new quantity, another checkout
           or cart edit got in first and the whole transaction is dropped.
        """
        try:
            with self._uow:
                lines = self._uow.carts.lines_for(user_id, for_update=True)
                items = OrderPricingService(self._uow.products).price_lines(lines)

                order = Order.place(
                    user_id=user_id,
                    shipping_address=shipping_address,
                    payment_method=payment_method,
                    items=items,
                )
                self._uow.orders.add(order)
                if self._uow.carts.consume(lines) != len(lines):
                    raise ConcurrencyConflictError(
                        f"Cart of {user_id} changed during checkout; reload and retry"
                    )
                self._uow.commit()
        except DomainException as exc:
            return fail("create_order", exc)

        logger.info(
            "Order #%s placed for %s, total %s",
            order.id,
            order.user_id,
            order.total_amount,
            extra={"operation": "create_order", "user_id": order.user_id},
        )
        return Success(order_to_dto(order))
