"""Value Objects shared across the domain.

Money and Quantity are immutable and compared by value.  Both refuse to
be constructed in an invalid state, so the rest of the domain never has
to re-check a negative price or a zero quantity.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering
from typing import Iterable

from storefront.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "INR"
_PAISE = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """Non-negative rupee amount, held to the paisa.

    Amounts are Decimals rounded half-up to two places on construction;
    floats are rejected outright.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")
        object.__setattr__(self, "amount", self.amount.quantize(_PAISE, ROUND_HALF_UP))

    # --- Construction ---------------------------------------------------------

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build from user or file input (``"45.50"``, ``45``)."""
        try:
            return Money(Decimal(str(amount).strip()), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)

    @staticmethod
    def total(amounts: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
        """Sum of ``amounts``; zero for an empty iterable."""
        result = Money.zero(currency)
        for amount in amounts:
            result = result + amount
        return result

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._amount_of(other), self.currency)

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._amount_of(other)
        if difference < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(difference, self.currency)

    def __mul__(self, units: int) -> Money:
        if isinstance(units, bool) or not isinstance(units, int):
            raise TypeError(f"Can only multiply Money by int, got {type(units).__name__}")
        return Money(self.amount * units, self.currency)

    def scale(self, factor: Decimal | str) -> Money:
        """Multiply by a fractional factor such as a distance in km."""
        return Money(self.amount * Decimal(str(factor)), self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._amount_of(other)

    def to_minor_units(self) -> int:
        """Amount in paise, as payment gateways expect."""
        return int(self.amount * 100)

    def __str__(self) -> str:
        return f"₹{self.amount:.2f}"

    def _amount_of(self, other: Money) -> Decimal:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other.amount


@dataclass(frozen=True)
class Quantity:
    """Whole number of units on an order line; always at least one."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not sneak in as 1.
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
