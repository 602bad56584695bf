"""Application service: Validate Payment use case (query).

A transaction id is valid iff a payment with that id is on record.  No
gateway re-verification happens here.  Surrounding whitespace is ignored,
as it is when the payment is recorded.
"""

from __future__ import annotations

from returns.result import Result, Success

from quitq.application.dto import PaymentDTO, payment_to_dto
from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import EntityNotFoundError
from quitq.domain.repository.unit_of_work import UnitOfWork


class ValidatePaymentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, transaction_id: str) -> Result[PaymentDTO, CoreError]:
        with self._uow:
            payment = self._uow.payments.get_by_transaction_id(transaction_id.strip())
        if payment is None:
            return fail("validate_payment", EntityNotFoundError("Payment not found"))
        return Success(payment_to_dto(payment))
