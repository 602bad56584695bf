"""Application service: Update Product use case."""

from __future__ import annotations

from returns.result import Result, Success

from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import DomainException, EntityNotFoundError
from quitq.domain.model.product import Product
from quitq.domain.model.value_objects import Money
from quitq.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, new_price: str) -> Result[Product, CoreError]:
        """Update a product's price.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.
        """
        try:
            with self._uow:
                product = self._uow.products.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

                product.update_price(Money.of(new_price))
                self._uow.products.save(product)
                self._uow.commit()
        except DomainException as exc:
            return fail("update_product", exc)
        return Success(product)
