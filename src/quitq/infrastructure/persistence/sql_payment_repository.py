"""SQLAlchemy-backed implementation of PaymentRepository."""

from __future__ import annotations

import dataclasses

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quitq.domain.exceptions import ConcurrencyConflictError
from quitq.domain.model.payment import Payment, PaymentStatus
from quitq.domain.model.value_objects import Money
from quitq.domain.repository.payment_repository import PaymentRepository
from quitq.infrastructure.persistence.tables import PaymentRow


class SqlPaymentRepository(PaymentRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_transaction_id(self, transaction_id: str) -> Payment | None:
        row = self._session.scalars(
            select(PaymentRow).where(PaymentRow.transaction_id == transaction_id)
        ).one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_for_order(self, order_id: int) -> list[Payment]:
        stmt = (
            select(PaymentRow)
            .where(PaymentRow.order_id == order_id)
            .order_by(PaymentRow.id)
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def add(self, payment: Payment) -> Payment:
        row = PaymentRow(
            order_id=payment.order_id,
            amount=payment.amount.amount,
            currency=payment.amount.currency,
            payment_method=payment.payment_method,
            transaction_id=payment.transaction_id,
            status=payment.status.value,
            paid_at=payment.paid_at,
        )
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            # UNIQUE(transaction_id) lost to a concurrent insert
            raise ConcurrencyConflictError(
                f"Transaction '{payment.transaction_id}' is already recorded"
            ) from exc
        return dataclasses.replace(payment, id=row.id)

    @staticmethod
    def _to_domain(row: PaymentRow) -> Payment:
        return Payment(
            id=row.id,
            order_id=row.order_id,
            amount=Money(row.amount, row.currency),
            payment_method=row.payment_method,
            transaction_id=row.transaction_id,
            status=PaymentStatus(row.status),
            paid_at=row.paid_at,
        )
