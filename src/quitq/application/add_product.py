"""Application service: Add Product use case (catalog seeding)."""

from __future__ import annotations

from returns.result import Result, Success

from quitq.application.result import CoreError, fail
from quitq.domain.exceptions import DomainException, ValidationError
from quitq.domain.model.product import Product
from quitq.domain.model.value_objects import Money
from quitq.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, price: str) -> Result[Product, CoreError]:
        """Add a new product to the catalog."""
        try:
            if not name or not name.strip():
                raise ValidationError("Product name is required")

            with self._uow:
                if self._uow.products.get_by_name(name.strip()) is not None:
                    raise ValidationError(f"Product '{name.strip()}' already exists")

                product = Product(id=self._uow.products.next_id(), name=name.strip(), price=Money.zero())
                product.update_price(Money.of(price))
                self._uow.products.save(product)
                self._uow.commit()
        except DomainException as exc:
            return fail("add_product", exc)
        return Success(product)
