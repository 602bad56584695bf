"""Order aggregate — the core of the ledger.

The Order is an aggregate root that owns its line items.  Items and the
total are fixed when the order is placed; afterwards only the status moves,
and only along the edges of the transition table below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from quitq.domain.exceptions import InvalidTransitionError, ValidationError
from quitq.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    """Order lifecycle states.  Values are the persisted status ids."""

    PLACED = 1
    PAID = 2
    SHIPPED = 3
    REFUNDED = 4
    CANCELLED = 5

    @property
    def allowed_targets(self) -> frozenset[OrderStatus]:
        return _TRANSITIONS[self]

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in self.allowed_targets


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PLACED: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED, OrderStatus.REFUNDED}),
    OrderStatus.SHIPPED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderItem:
    """One order line with the catalog price captured at placement."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # price snapshot, never re-read from the catalog

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.place()`` for new orders.  The ``__init__`` stays plain so
    repositories can reconstitute persisted orders, including the stored
    ``total_amount`` and ``version``, without recomputing anything.
    """

    id: int | None
    user_id: str
    items: tuple[OrderItem, ...]
    total_amount: Money
    shipping_address: str
    payment_method: str
    status: OrderStatus = OrderStatus.PLACED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        user_id: str,
        shipping_address: str,
        payment_method: str,
        items: list[OrderItem],
    ) -> Order:
        """Create a PLACED order whose total is the sum of its line totals."""
        if not user_id or not user_id.strip():
            raise ValidationError("User id is required")
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.sum((item.line_total for item in items), items[0].unit_price.currency)

        return Order(
            id=None,
            user_id=user_id.strip(),
            items=tuple(items),
            total_amount=total,
            shipping_address=shipping_address.strip(),
            payment_method=payment_method.strip(),
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, target: OrderStatus) -> None:
        """Move to *target* if the transition table allows it.

        Touches ``status`` only; items and total are never rewritten.
        """
        if not self.status.can_transition_to(target):
            raise InvalidTransitionError(
                f"Cannot move order #{self.id} from {self.status.name} "
                f"to {target.name}"
            )
        self.status = target

    def mark_paid(self) -> None:
        self.transition_to(OrderStatus.PAID)

    def cancel(self) -> None:
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransitionError(f"Order #{self.id} is already cancelled")
        self.transition_to(OrderStatus.CANCELLED)
