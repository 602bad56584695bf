"""Application service: Add To Cart use case.

Adding a product that is already in the cart increases that line's
quantity instead of creating a second line.  The store applies the
increment, so two concurrent adds both count.
"""

from __future__ import annotations

from returns.result import Result, Success

from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import DomainException, EntityNotFoundError
from quitq.domain.model.value_objects import Quantity
from quitq.domain.repository.unit_of_work import UnitOfWork


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, product_id: str, quantity: int) -> Result[int, CoreError]:
        """Return the line's new quantity."""
        try:
            added = Quantity(quantity)
            with self._uow:
                if self._uow.products.get_by_id(product_id) is None:
                    raise EntityNotFoundError(f"Product not found: '{product_id}'")

                total = self._uow.carts.increment(user_id, product_id, added)
                self._uow.commit()
        except DomainException as exc:
            return fail("add_to_cart", exc)
        return Success(total.value)
