"""SQLAlchemy unit of work: one Session, one transaction, all repositories.

Cart lines, orders and payments live in the same database, so a checkout
that places an order and clears the cart is a single commit.

Database failures that are not business-rule violations leave the block as
StoreUnavailableError.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from quitq.domain.exceptions import ConcurrencyConflictError, StoreUnavailableError
from quitq.domain.repository.unit_of_work import UnitOfWork
from quitq.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from quitq.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from quitq.infrastructure.persistence.sql_payment_repository import SqlPaymentRepository
from quitq.infrastructure.persistence.sql_product_repository import SqlProductRepository

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self.orders = SqlOrderRepository(self._session)
        self.payments = SqlPaymentRepository(self._session)
        self.carts = SqlCartRepository(self._session)
        self.products = SqlProductRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        session = self._session
        self._session = None
        try:
            if session is not None:
                session.rollback()
        finally:
            if session is not None:
                session.close()

        if isinstance(exc, SQLAlchemyError):
            logger.error("Store failure, transaction rolled back", exc_info=exc)
            raise StoreUnavailableError(str(exc)) from exc

    def commit(self) -> None:
        try:
            self._require_session().commit()
        except StaleDataError as exc:
            raise ConcurrencyConflictError(
                "Order was modified by another request; reload and retry"
            ) from exc
        except IntegrityError as exc:
            raise ConcurrencyConflictError(
                "A concurrent request wrote the same record; reload and retry"
            ) from exc

    def rollback(self) -> None:
        self._require_session().rollback()

    def _require_session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work used outside of a 'with' block")
        return self._session
