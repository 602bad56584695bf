"""Application service: Remove From Cart and Clear Cart use cases."""

from __future__ import annotations

from returns.result import Result, Success

from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import DomainException, EntityNotFoundError
from quitq.domain.repository.unit_of_work import UnitOfWork


class RemoveFromCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, product_id: str) -> Result[None, CoreError]:
        try:
            with self._uow:
                if self._uow.carts.get_line(user_id, product_id) is None:
                    raise EntityNotFoundError(f"Product '{product_id}' is not in the cart")
                self._uow.carts.remove(user_id, product_id)
                self._uow.commit()
        except DomainException as exc:
            return fail("remove_from_cart", exc)
        return Success(None)


class ClearCartHandler:
    """Empty the cart.  Succeeds on an already-empty cart."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> Result[None, CoreError]:
        with self._uow:
            self._uow.carts.clear(user_id)
            self._uow.commit()
        return Success(None)
