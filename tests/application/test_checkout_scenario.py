"""End-to-end checkout: cart -> order -> payment -> status machine."""

from decimal import Decimal

from returns.pipeline import is_successful

from quitq.application.add_to_cart import AddToCartHandler
from quitq.application.cancel_order import CancelOrderHandler
from quitq.application.create_order import CreateOrderHandler
from quitq.application.list_order_payments import ListOrderPaymentsHandler
from quitq.application.process_payment import ProcessPaymentHandler
from quitq.application.show_order import ShowOrderHandler
from quitq.application.validate_payment import ValidatePaymentHandler
from quitq.domain.exceptions import ErrorKind
from tests.fakes import FakeUnitOfWork, product


def test_full_scenario():
    uow = FakeUnitOfWork([product("A", "productA", "100"), product("B", "productB", "200")])
    AddToCartHandler(uow).handle("user1", "A", 2)
    AddToCartHandler(uow).handle("user1", "B", 1)

    order = CreateOrderHandler(uow).handle("user1", "xyz", "UPI").unwrap()
    assert order.total_amount == Decimal("400")
    assert uow.carts.lines_for("user1") == []

    payment = ProcessPaymentHandler(uow).handle(order.id, "UPI", "400").unwrap()
    assert ShowOrderHandler(uow).handle(order.id).unwrap().status == "PAID"
    assert is_successful(ValidatePaymentHandler(uow).handle(payment.transaction_id))

    cancel = CancelOrderHandler(uow).handle(order.id)
    assert cancel.failure().kind == ErrorKind.INVALID_STATE

    wrong = ProcessPaymentHandler(uow).handle(order.id, "UPI", "300")
    assert not is_successful(wrong)
    assert len(ListOrderPaymentsHandler(uow).handle(order.id)) == 1
