"""Payment record.

A Payment is written once, when an order's payment is processed, and never
changed afterwards.  ``transaction_id`` is the external lookup key and is
unique across all payments.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from quitq.domain.exceptions import ValidationError
from quitq.domain.model.value_objects import Money


class PaymentStatus(Enum):
    COMPLETED = "Completed"
    FAILED = "Failed"
    PENDING = "Pending"


def new_transaction_id() -> str:
    return f"TXN-{uuid.uuid4().hex.upper()}"


@dataclass(frozen=True)
class Payment:

    id: int | None
    order_id: int
    amount: Money
    payment_method: str
    transaction_id: str
    status: PaymentStatus = PaymentStatus.COMPLETED
    paid_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def record(
        order_id: int,
        amount: Money,
        payment_method: str,
        transaction_id: str | None = None,
    ) -> Payment:
        """Build a Completed payment, generating a transaction id if none given."""
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")
        if transaction_id is not None and not transaction_id.strip():
            raise ValidationError("Transaction id cannot be blank")

        return Payment(
            id=None,
            order_id=order_id,
            amount=amount,
            payment_method=payment_method.strip(),
            transaction_id=(transaction_id or new_transaction_id()).strip(),
        )
