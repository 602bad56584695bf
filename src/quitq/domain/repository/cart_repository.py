"""Abstract Cart Store.

Lives behind the same unit of work as the order ledger so that reading the
cart, placing the order and clearing the cart share one transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from quitq.domain.model.cart import CartLine
from quitq.domain.model.value_objects import Quantity


class CartRepository(ABC):

    @abstractmethod
    def lines_for(self, user_id: str, *, for_update: bool = False) -> list[CartLine]:
        """Return the user's cart lines in the order they were added.

        With ``for_update`` the lines stay locked until the transaction ends.
        """

    @abstractmethod
    def get_line(self, user_id: str, product_id: str) -> CartLine | None:
        """Return one cart line, or None."""

    @abstractmethod
    def save(self, line: CartLine) -> None:
        """Insert or update a cart line."""

    @abstractmethod
    def increment(self, user_id: str, product_id: str, quantity: Quantity) -> Quantity:
        """Add *quantity* to a line, creating it if needed; return the new total.

        The increment is applied by the store itself, so concurrent adds to
        the same line are never lost.
        """

    @abstractmethod
    def remove(self, user_id: str, product_id: str) -> None:
        """Delete one cart line (no-op if absent)."""

    @abstractmethod
    def consume(self, lines: list[CartLine]) -> int:
        """Delete exactly *lines*, each only while its quantity is unchanged.

        Returns how many were deleted; fewer than ``len(lines)`` means the
        cart moved on since it was read.
        """

    @abstractmethod
    def clear(self, user_id: str) -> None:
        """Delete every line in the user's cart."""
