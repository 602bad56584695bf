"""Tests for the SQLAlchemy store, run against a throwaway SQLite file."""

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from quitq.application.add_to_cart import AddToCartHandler
from quitq.application.create_order import CreateOrderHandler
from quitq.application.list_order_payments import ListOrderPaymentsHandler
from quitq.application.list_user_orders import ListUserOrdersHandler
from quitq.application.process_payment import ProcessPaymentHandler
from quitq.application.show_order import ShowOrderHandler
from quitq.domain.exceptions import ConcurrencyConflictError, ErrorKind, StoreUnavailableError
from quitq.domain.model.cart import CartLine
from quitq.domain.model.order import OrderStatus
from quitq.domain.model.payment import Payment
from quitq.domain.model.product import Product
from quitq.domain.model.value_objects import Money, Quantity
from quitq.infrastructure.bootstrap import session_factory
from quitq.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@pytest.fixture
def factory(tmp_path):
    factory = session_factory(f"sqlite:///{tmp_path / 'quitq.db'}")
    with SqlUnitOfWork(factory) as uow:
        uow.products.save(Product(id="1", name="ProductA", price=Money.of("100")))
        uow.products.save(Product(id="2", name="ProductB", price=Money.of("200")))
        uow.commit()
    return factory


def _place_order(factory, user_id: str = "user1") -> int:
    AddToCartHandler(SqlUnitOfWork(factory)).handle(user_id, "1", 2)
    AddToCartHandler(SqlUnitOfWork(factory)).handle(user_id, "2", 1)
    return CreateOrderHandler(SqlUnitOfWork(factory)).handle(user_id, "xyz", "UPI").unwrap().id


class TestRoundTrip:

    def test_order_with_items(self, factory):
        order_id = _place_order(factory)

        with SqlUnitOfWork(factory) as uow:
            order = uow.orders.get_by_id(order_id)
            cart = uow.carts.lines_for("user1")

        assert order.total_amount.amount == Decimal("400")
        assert [(i.product_id, i.quantity.value) for i in order.items] == [("1", 2), ("2", 1)]
        assert order.status == OrderStatus.PLACED
        assert order.version == 1
        assert cart == []

    def test_list_for_user(self, factory):
        first = _place_order(factory)
        second = _place_order(factory)
        _place_order(factory, "user2")

        with SqlUnitOfWork(factory) as uow:
            orders = uow.orders.list_for_user("user1")

        assert [o.id for o in orders] == [first, second]

    def test_uncommitted_work_is_discarded(self, factory):
        with SqlUnitOfWork(factory) as uow:
            uow.products.save(Product(id="3", name="Ghost", price=Money.of("5")))

        with SqlUnitOfWork(factory) as uow:
            assert uow.products.get_by_id("3") is None

    def test_next_product_id(self, factory):
        with SqlUnitOfWork(factory) as uow:
            assert uow.products.next_id() == "3"

    def test_repositories_need_a_with_block(self, factory):
        with pytest.raises(RuntimeError):
            SqlUnitOfWork(factory).commit()


class TestCheckoutAtomicity:

    def test_unknown_product_keeps_cart_and_writes_no_order(self, factory):
        with SqlUnitOfWork(factory) as uow:
            uow.carts.save(CartLine("user1", "1", Quantity(1)))
            uow.carts.save(CartLine("user1", "404", Quantity(1)))
            uow.commit()

        result = CreateOrderHandler(SqlUnitOfWork(factory)).handle("user1", "xyz", "UPI")

        assert result.failure().kind == ErrorKind.NOT_FOUND
        with SqlUnitOfWork(factory) as uow:
            assert len(uow.carts.lines_for("user1")) == 2
            assert uow.orders.list_for_user("user1") == []

    def test_rejected_payment_writes_nothing(self, factory):
        order_id = _place_order(factory)

        result = ProcessPaymentHandler(SqlUnitOfWork(factory)).handle(order_id, "UPI", "300")

        assert result.failure().kind == ErrorKind.AMOUNT_MISMATCH
        assert ListOrderPaymentsHandler(SqlUnitOfWork(factory)).handle(order_id) == []
        assert ShowOrderHandler(SqlUnitOfWork(factory)).handle(order_id).unwrap().status == "PLACED"

    def test_payment_and_status_commit_together(self, factory):
        order_id = _place_order(factory)

        payment = ProcessPaymentHandler(SqlUnitOfWork(factory)).handle(order_id, "UPI", "400.00").unwrap()

        assert ShowOrderHandler(SqlUnitOfWork(factory)).handle(order_id).unwrap().status == "PAID"
        listed = ListOrderPaymentsHandler(SqlUnitOfWork(factory)).handle(order_id)
        assert [p.transaction_id for p in listed] == [payment.transaction_id]


class TestConcurrency:

    def test_stale_status_write_is_conflict(self, factory):
        order_id = _place_order(factory)
        first, second = SqlUnitOfWork(factory), SqlUnitOfWork(factory)

        with first:
            stale = first.orders.get_by_id(order_id)
            with second:
                fresh = second.orders.get_by_id(order_id, for_update=True)
                fresh.mark_paid()
                second.orders.update_status(fresh)
                second.commit()

            stale.cancel()
            with pytest.raises(ConcurrencyConflictError):
                first.orders.update_status(stale)

        with SqlUnitOfWork(factory) as uow:
            assert uow.orders.get_by_id(order_id).status == OrderStatus.PAID

    def test_duplicate_transaction_id_is_conflict(self, factory):
        order_id = _place_order(factory)
        payment = Payment.record(order_id, Money.of("400"), "UPI", transaction_id="TX1")

        with SqlUnitOfWork(factory) as uow:
            uow.payments.add(payment)
            uow.commit()

        with pytest.raises(ConcurrencyConflictError):
            with SqlUnitOfWork(factory) as uow:
                uow.payments.add(payment)


class _InterleavingUnitOfWork(SqlUnitOfWork):
    """Runs *competitor* on its own session right after the first call to
    ``getattr(self, repo).method``, so it commits in the middle of this
    transaction.
    """

    def __init__(self, factory, repo: str, method: str, competitor) -> None:
        super().__init__(factory)
        self._hook = (repo, method)
        self._competitor = competitor

    def __enter__(self) -> SqlUnitOfWork:
        uow = super().__enter__()
        repo_name, method_name = self._hook
        repo = getattr(self, repo_name)
        original = getattr(repo, method_name)
        competitor = self._competitor

        def interleaved(*args, **kwargs):
            result = original(*args, **kwargs)
            if competitor is not None:
                competitor()
                setattr(repo, method_name, original)
            return result

        setattr(repo, method_name, interleaved)
        self._competitor = None
        return uow


class TestConcurrentCart:

    def test_competing_checkout_of_same_cart_is_conflict(self, factory):
        AddToCartHandler(SqlUnitOfWork(factory)).handle("user1", "1", 2)

        def competing_checkout():
            result = CreateOrderHandler(SqlUnitOfWork(factory)).handle("user1", "xyz", "UPI")
            assert result.unwrap().total_amount == Decimal("200")

        uow = _InterleavingUnitOfWork(factory, "carts", "lines_for", competing_checkout)
        result = CreateOrderHandler(uow).handle("user1", "xyz", "UPI")

        assert result.failure().kind == ErrorKind.CONFLICT
        orders = ListUserOrdersHandler(SqlUnitOfWork(factory)).handle("user1")
        assert len(orders) == 1

    def test_cart_edit_during_checkout_is_conflict(self, factory):
        AddToCartHandler(SqlUnitOfWork(factory)).handle("user1", "1", 2)

        def add_one_more():
            AddToCartHandler(SqlUnitOfWork(factory)).handle("user1", "1", 1)

        uow = _InterleavingUnitOfWork(factory, "carts", "lines_for", add_one_more)
        result = CreateOrderHandler(uow).handle("user1", "xyz", "UPI")

        assert result.failure().kind == ErrorKind.CONFLICT
        assert ListUserOrdersHandler(SqlUnitOfWork(factory)).handle("user1") == []
        with SqlUnitOfWork(factory) as check:
            assert [line.quantity.value for line in check.carts.lines_for("user1")] == [3]

    def test_concurrent_adds_both_count(self, factory):
        def competing_add():
            AddToCartHandler(SqlUnitOfWork(factory)).handle("user1", "1", 1)

        uow = _InterleavingUnitOfWork(factory, "products", "get_by_id", competing_add)
        result = AddToCartHandler(uow).handle("user1", "1", 1)

        assert result.unwrap() == 2
        with SqlUnitOfWork(factory) as check:
            assert check.carts.get_line("user1", "1").quantity.value == 2

    def test_increment_existing_line(self, factory):
        with SqlUnitOfWork(factory) as uow:
            uow.carts.increment("user1", "1", Quantity(2))
            assert uow.carts.increment("user1", "1", Quantity(3)) == Quantity(5)
            uow.commit()


class TestStoreUnavailable:

    def test_database_errors_escape_as_store_unavailable(self):
        # No tables created: every query fails at the driver.
        bare = sessionmaker(bind=create_engine("sqlite://"))

        with pytest.raises(StoreUnavailableError):
            ShowOrderHandler(SqlUnitOfWork(bare)).handle(1)
