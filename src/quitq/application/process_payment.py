"""Application service: Process Payment use case.

Records a full payment against a PLACED order and moves the order to PAID,
both in one transaction.  Policy:

- the amount must equal the order total exactly (no partial payments);
- orders that are not PLACED accept no new payment, which rules out
  charging an already-paid order twice;
- a caller-supplied transaction id that is already on record is rejected
  as a conflict.

A rejected payment writes nothing.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from returns.result import Result, Success

from quitq.application.dto import PaymentDTO, payment_to_dto
from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import (
    AmountMismatchError,
    ConcurrencyConflictError,
    DomainException,
    EntityNotFoundError,
    InvalidTransitionError,
)
from quitq.domain.model.order import OrderStatus
from quitq.domain.model.payment import Payment
from quitq.domain.model.value_objects import Money
from quitq.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ProcessPaymentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        payment_method: str,
        amount: str | int | Decimal,
        transaction_id: str | None = None,
    ) -> Result[PaymentDTO, CoreError]:
        try:
            with self._uow:
                order = self._uow.orders.get_by_id(order_id, for_update=True)
                if order is None:
                    raise EntityNotFoundError("Order not found")

                if order.status != OrderStatus.PLACED:
                    raise InvalidTransitionError(
                        f"Order #{order.id} is {order.status.name} and cannot take a payment"
                    )

                paid = Money.of(amount, order.total_amount.currency)
                if not paid.matches(order.total_amount):
                    raise AmountMismatchError(
                        f"Amount mismatch: order total is {order.total_amount}, "
                        f"received {paid}"
                    )

                if (
                    transaction_id is not None
                    and self._uow.payments.get_by_transaction_id(transaction_id.strip())
                    is not None
                ):
                    raise ConcurrencyConflictError(
                        f"Transaction '{transaction_id}' is already recorded"
                    )

                payment = Payment.record(
                    order_id=order.id,  # type: ignore[arg-type]
                    amount=paid,
                    payment_method=payment_method,
                    transaction_id=transaction_id,
                )
                payment = self._uow.payments.add(payment)

                order.mark_paid()
                self._uow.orders.update_status(order)
                self._uow.commit()
        except DomainException as exc:
            return fail("process_payment", exc)

        logger.info(
            "Payment %s of %s recorded for order #%s",
            payment.transaction_id,
            payment.amount,
            payment.order_id,
            extra={"operation": "process_payment", "status": order.status.name},
        )
        return Success(payment_to_dto(payment))
