"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from quitq.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int, *, for_update: bool = False) -> Order | None:
        """Return an order by its ID, or None if not found.

        With ``for_update`` the row is locked until the surrounding unit of
        work ends, so a status check and the following write cannot
        interleave with another writer.
        """

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Order]:
        """Return the user's orders, oldest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order with its items and assign ``order.id``."""

    @abstractmethod
    def update_status(self, order: Order) -> None:
        """Persist ``order.status``.

        Raises ConcurrencyConflictError if the stored version no longer
        matches ``order.version``.
        """
