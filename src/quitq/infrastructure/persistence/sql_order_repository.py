"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import StaleDataError

from quitq.domain.exceptions import ConcurrencyConflictError, EntityNotFoundError
from quitq.domain.model.order import Order, OrderItem, OrderStatus
from quitq.domain.model.value_objects import Money, Quantity
from quitq.domain.repository.order_repository import OrderRepository
from quitq.infrastructure.persistence.tables import OrderItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int, *, for_update: bool = False) -> Order | None:
        stmt = (
            select(OrderRow)
            .where(OrderRow.id == order_id)
            .options(selectinload(OrderRow.items))
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        row = self._session.scalars(stmt).one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_for_user(self, user_id: str) -> list[Order]:
        stmt = (
            select(OrderRow)
            .where(OrderRow.user_id == user_id)
            .options(selectinload(OrderRow.items))
            .order_by(OrderRow.created_at, OrderRow.id)
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def add(self, order: Order) -> None:
        row = self._to_row(order)
        self._session.add(row)
        self._session.flush()
        order.id = row.id
        order.version = row.version

    def update_status(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id)
        if row is None:
            raise EntityNotFoundError("Order not found")
        if row.version != order.version:
            raise ConcurrencyConflictError(
                f"Order #{order.id} was modified by another request; reload and retry"
            )

        row.status_id = order.status.value
        try:
            self._session.flush()
        except StaleDataError as exc:
            raise ConcurrencyConflictError(
                f"Order #{order.id} was modified by another request; reload and retry"
            ) from exc
        order.version = row.version

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        return OrderRow(
            user_id=order.user_id,
            total_amount=order.total_amount.amount,
            currency=order.total_amount.currency,
            shipping_address=order.shipping_address,
            payment_method=order.payment_method,
            status_id=order.status.value,
            created_at=order.created_at,
            items=[
                OrderItemRow(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                )
                for item in order.items
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = tuple(
            OrderItem(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=Quantity(item.quantity),
                unit_price=Money(item.unit_price, row.currency),
            )
            for item in row.items
        )
        return Order(
            id=row.id,
            user_id=row.user_id,
            items=items,
            total_amount=Money(row.total_amount, row.currency),
            shipping_address=row.shipping_address,
            payment_method=row.payment_method,
            status=OrderStatus(row.status_id),
            created_at=row.created_at,
            version=row.version,
        )
