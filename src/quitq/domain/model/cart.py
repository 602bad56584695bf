"""Cart lines — the checkout input owned by the Cart Store."""

from __future__ import annotations

from dataclasses import dataclass

from quitq.domain.model.value_objects import Quantity


@dataclass
class CartLine:
    """One product in a user's cart.

    The quantity is always a positive ``Quantity``; increments happen in
    the Cart Store so concurrent adds are not lost.
    """

    user_id: str
    product_id: str
    quantity: Quantity

    def set_quantity(self, qty: int) -> None:
        self.quantity = Quantity(qty)
