"""Tests for the order query handlers."""

from returns.pipeline import is_successful

from quitq.application.create_order import CreateOrderHandler
from quitq.application.list_user_orders import ListUserOrdersHandler
from quitq.application.show_order import ShowOrderHandler
from quitq.domain.exceptions import ErrorKind
from tests.fakes import FakeUnitOfWork, fill_cart, product


def _uow_with_orders(user_id: str, count: int) -> FakeUnitOfWork:
    uow = FakeUnitOfWork([product("1", "ProductA", "100")])
    for _ in range(count):
        fill_cart(uow, user_id, {"1": 1})
        assert is_successful(CreateOrderHandler(uow).handle(user_id, "addr", "UPI"))
    return uow


class TestListUserOrders:

    def test_no_orders_is_empty_list(self):
        assert ListUserOrdersHandler(FakeUnitOfWork()).handle("nobody") == []

    def test_returns_users_orders_in_creation_order(self):
        uow = _uow_with_orders("user1", 3)
        fill_cart(uow, "user2", {"1": 1})
        CreateOrderHandler(uow).handle("user2", "addr", "UPI")

        orders = ListUserOrdersHandler(uow).handle("user1")

        assert [o.id for o in orders] == [1, 2, 3]
        assert all(o.user_id == "user1" for o in orders)


class TestShowOrder:

    def test_found(self):
        uow = _uow_with_orders("user1", 1)
        assert ShowOrderHandler(uow).handle(1).unwrap().id == 1

    def test_not_found(self):
        result = ShowOrderHandler(FakeUnitOfWork()).handle(42)
        assert result.failure().kind == ErrorKind.NOT_FOUND
        assert result.failure().message == "Order not found"
