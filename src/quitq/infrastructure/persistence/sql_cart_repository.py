"""SQLAlchemy-backed Cart Store."""

from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quitq.domain.exceptions import ConcurrencyConflictError
from quitq.domain.model.cart import CartLine
from quitq.domain.model.value_objects import Quantity
from quitq.domain.repository.cart_repository import CartRepository
from quitq.infrastructure.persistence.tables import CartLineRow


class SqlCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def lines_for(self, user_id: str, *, for_update: bool = False) -> list[CartLine]:
        stmt = (
            select(CartLineRow)
            .where(CartLineRow.user_id == user_id)
            .order_by(CartLineRow.id)
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def get_line(self, user_id: str, product_id: str) -> CartLine | None:
        row = self._find_row(user_id, product_id)
        return self._to_domain(row) if row is not None else None

    def save(self, line: CartLine) -> None:
        row = self._find_row(line.user_id, line.product_id)
        if row is None:
            row = CartLineRow(user_id=line.user_id, product_id=line.product_id)
            self._session.add(row)
        row.quantity = line.quantity.value
        self._session.flush()

    def increment(self, user_id: str, product_id: str, quantity: Quantity) -> Quantity:
        bumped = self._session.execute(
            update(CartLineRow)
            .where(CartLineRow.user_id == user_id, CartLineRow.product_id == product_id)
            .values(quantity=CartLineRow.quantity + quantity.value)
            .execution_options(synchronize_session=False)
        )
        if bumped.rowcount == 0:
            self._session.add(
                CartLineRow(user_id=user_id, product_id=product_id, quantity=quantity.value)
            )
            try:
                self._session.flush()
            except IntegrityError as exc:
                # UNIQUE(user_id, product_id) lost to a concurrent first add
                raise ConcurrencyConflictError(
                    f"Cart line for product '{product_id}' was created concurrently; retry"
                ) from exc

        total = self._session.scalars(
            select(CartLineRow.quantity).where(
                CartLineRow.user_id == user_id,
                CartLineRow.product_id == product_id,
            )
        ).one()
        return Quantity(total)

    def remove(self, user_id: str, product_id: str) -> None:
        self._session.execute(
            delete(CartLineRow).where(
                CartLineRow.user_id == user_id,
                CartLineRow.product_id == product_id,
            )
        )

    def consume(self, lines: list[CartLine]) -> int:
        deleted = 0
        for line in lines:
            result = self._session.execute(
                delete(CartLineRow)
                .where(
                    CartLineRow.user_id == line.user_id,
                    CartLineRow.product_id == line.product_id,
                    CartLineRow.quantity == line.quantity.value,
                )
                .execution_options(synchronize_session=False)
            )
            deleted += result.rowcount
        return deleted

    def clear(self, user_id: str) -> None:
        self._session.execute(delete(CartLineRow).where(CartLineRow.user_id == user_id))

    # --- Helpers --------------------------------------------------------------

    def _find_row(self, user_id: str, product_id: str) -> CartLineRow | None:
        return self._session.scalars(
            select(CartLineRow).where(
                CartLineRow.user_id == user_id,
                CartLineRow.product_id == product_id,
            )
        ).one_or_none()

    @staticmethod
    def _to_domain(row: CartLineRow) -> CartLine:
        return CartLine(
            user_id=row.user_id,
            product_id=row.product_id,
            quantity=Quantity(row.quantity),
        )
