"""Application service: List the payments recorded against an order (query)."""

from __future__ import annotations

from quitq.application.dto import PaymentDTO, payment_to_dto
from quitq.domain.repository.unit_of_work import UnitOfWork


class ListOrderPaymentsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> list[PaymentDTO]:
        with self._uow:
            payments = self._uow.payments.list_for_order(order_id)
        return [payment_to_dto(payment) for payment in payments]
