"""Abstract repository for Payment records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from quitq.domain.model.payment import Payment


class PaymentRepository(ABC):

    @abstractmethod
    def get_by_transaction_id(self, transaction_id: str) -> Payment | None:
        """Return the payment with this transaction id, or None."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[Payment]:
        """Return every payment recorded against an order, in insertion order."""

    @abstractmethod
    def add(self, payment: Payment) -> Payment:
        """Persist a new payment and return it with its ID assigned."""
