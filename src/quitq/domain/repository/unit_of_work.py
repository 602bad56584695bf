"""Unit of Work — the transaction boundary for every write path.

Use as a context manager::

    with uow:
        order = uow.orders.get_by_id(order_id, for_update=True)
        ...
        uow.commit()

Leaving the block without ``commit()`` (or by an exception) rolls back
everything done inside it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from quitq.domain.repository.cart_repository import CartRepository
from quitq.domain.repository.order_repository import OrderRepository
from quitq.domain.repository.payment_repository import PaymentRepository
from quitq.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    orders: OrderRepository
    payments: PaymentRepository
    carts: CartRepository
    products: ProductRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``__enter__`` durable.

        Raises ConcurrencyConflictError when an optimistic version check
        fails at flush time.
        """

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes (no-op after a successful commit)."""
