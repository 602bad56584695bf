"""Money and quantities as the ledger sees them.

Both are frozen and validated on construction: a negative price or a cart
line of zero units cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Iterable

from quitq.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "INR"


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount tagged with its currency.

    Equality is numeric, so ``Money.of("400") == Money.of("400.00")``.
    Amounts are never rounded here; the store keeps two decimal places and
    product prices are checked for that when they are set.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount.is_signed() and self.amount != 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @classmethod
    def of(cls, amount: str | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Parse user or CLI input such as ``"400"`` or ``"15.50"``."""
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return cls(value, currency)

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal("0.00"), currency)

    @classmethod
    def sum(cls, amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        """Total of *amounts*; every one of them must be in *currency*."""
        total = cls.zero(currency)
        for money in amounts:
            total = total + money
        return total

    def __add__(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, units: int) -> Money:
        if isinstance(units, bool) or not isinstance(units, int):
            raise TypeError(f"Money can only be scaled by a unit count, got {units!r}")
        return Money(self.amount * units, self.currency)

    def matches(self, other: Money) -> bool:
        """True when *other* is exactly the same sum in the same currency."""
        return self.currency == other.currency and self.amount == other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"


@dataclass(frozen=True)
class Quantity:
    """Units of one product on a cart line or order item; always >= 1."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True would otherwise pass as 1
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
