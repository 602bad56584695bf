"""SQLAlchemy-backed implementation of ProductRepository (Catalog Lookup)."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from quitq.domain.model.product import Product
from quitq.domain.model.value_objects import Money
from quitq.domain.repository.product_repository import ProductRepository
from quitq.infrastructure.persistence.tables import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Product | None:
        row = self._session.scalars(
            select(ProductRow).where(func.lower(ProductRow.name) == name.lower())
        ).first()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        rows = self._session.scalars(select(ProductRow).order_by(ProductRow.name))
        return [self._to_domain(row) for row in rows]

    def next_id(self) -> str:
        ids = self._session.scalars(select(ProductRow.id))
        numeric = [int(i) for i in ids if i.isdigit()]
        return str(max(numeric) + 1) if numeric else "1"

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            row = ProductRow(id=product.id)
            self._session.add(row)
        row.name = product.name
        row.price = product.price.amount
        row.currency = product.price.currency
        self._session.flush()

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(id=row.id, name=row.name, price=Money(row.price, row.currency))
