"""Application service: Update Cart Item use case."""

from __future__ import annotations

from returns.result import Result, Success

from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import DomainException, EntityNotFoundError
from quitq.domain.repository.unit_of_work import UnitOfWork


class UpdateCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, product_id: str, quantity: int) -> Result[int, CoreError]:
        """Set the quantity of a line that is already in the cart."""
        try:
            with self._uow:
                line = self._uow.carts.get_line(user_id, product_id)
                if line is None:
                    raise EntityNotFoundError(f"Product '{product_id}' is not in the cart")
                line.set_quantity(quantity)
                self._uow.carts.save(line)
                self._uow.commit()
        except DomainException as exc:
            return fail("update_cart_item", exc)
        return Success(line.quantity.value)
