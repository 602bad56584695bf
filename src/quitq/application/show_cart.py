"""Application service: Show Cart use case (query).

Prices shown here are the *current* catalog prices; they become binding
only when the order is placed.
"""

from __future__ import annotations

from quitq.application.dto import CartLineDTO
from quitq.domain.repository.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> list[CartLineDTO]:
        result: list[CartLineDTO] = []
        with self._uow:
            for line in self._uow.carts.lines_for(user_id):
                product = self._uow.products.get_by_id(line.product_id)
                if product is None:
                    # Product left the catalog; checkout will reject this line.
                    result.append(
                        CartLineDTO(line.product_id, "(unavailable)", line.quantity.value, "-", "-")
                    )
                    continue
                result.append(
                    CartLineDTO(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=line.quantity.value,
                        unit_price=str(product.price),
                        line_total=str(product.price * line.quantity.value),
                    )
                )
        return result
