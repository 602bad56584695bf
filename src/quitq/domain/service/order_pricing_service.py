"""Domain service: Order Pricing.

Turns cart lines into priced order items by resolving every product through
the catalog.  Nothing is built until every line has resolved, so a single
unknown product fails the whole checkout and no partial order exists.
"""

from __future__ import annotations

from quitq.domain.exceptions import EmptyCartError, EntityNotFoundError
from quitq.domain.model.cart import CartLine
from quitq.domain.model.order import OrderItem
from quitq.domain.model.product import Product
from quitq.domain.repository.product_repository import ProductRepository


class OrderPricingService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def price_lines(self, lines: list[CartLine]) -> list[OrderItem]:
        """Return one OrderItem per cart line, priced at the current catalog value.

          Phase 1 — resolve: look every product up; fail fast on the first
                    one the catalog does not know.
          Phase 2 — snapshot: copy name and unit price into the items.
        """
        if not lines:
            raise EmptyCartError("Cart is empty")

        # Phase 1: resolve everything before building anything
        resolved: list[tuple[CartLine, Product]] = []
        for line in lines:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{line.product_id}'")
            resolved.append((line, product))

        # Phase 2: snapshot prices
        return [
            OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=line.quantity,
                unit_price=product.price,  # <-- price snapshot
            )
            for line, product in resolved
        ]
