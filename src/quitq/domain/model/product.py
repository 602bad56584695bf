"""Product as seen by the Catalog Lookup.

Only what order placement needs: a display name and the current unit price.
Prices change over time; orders keep their own snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from quitq.domain.exceptions import ValidationError
from quitq.domain.model.value_objects import Money

CENT = Decimal("0.01")


@dataclass
class Product:

    id: str
    name: str
    price: Money

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        Existing orders are unaffected: their items hold a price snapshot.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        if new_price.amount != new_price.amount.quantize(CENT):
            raise ValidationError(f"Product price {new_price.amount} has sub-cent precision")
        self.price = new_price
