"""Read models handed to the CLI.

Orders and payments are flattened into frozen records with money already
formatted, so callers never touch the aggregates or their value objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from quitq.domain.model.order import Order
from quitq.domain.model.payment import Payment

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "100.00 INR"
    line_total: str


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: str
    status: str
    items: list[OrderItemDTO]
    total_amount: Decimal
    currency: str
    total: str
    shipping_address: str
    payment_method: str
    created_at: str


@dataclass(frozen=True)
class PaymentDTO:
    id: int
    order_id: int
    amount: Decimal
    currency: str
    payment_method: str
    transaction_id: str
    status: str
    paid_at: str


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.name,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total_amount=order.total_amount.amount,
        currency=order.total_amount.currency,
        total=str(order.total_amount),
        shipping_address=order.shipping_address,
        payment_method=order.payment_method,
        created_at=order.created_at.strftime(TIMESTAMP_FORMAT),
    )


def payment_to_dto(payment: Payment) -> PaymentDTO:
    return PaymentDTO(
        id=payment.id,  # type: ignore[arg-type]
        order_id=payment.order_id,
        amount=payment.amount.amount,
        currency=payment.amount.currency,
        payment_method=payment.payment_method,
        transaction_id=payment.transaction_id,
        status=payment.status.value,
        paid_at=payment.paid_at.strftime(TIMESTAMP_FORMAT),
    )
