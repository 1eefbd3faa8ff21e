"""Value objects for prices and quantities.

Both are immutable and validate themselves on construction, so a
negative price or a zero-unit cart line can never reach an order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from storefront.domain.exceptions import ValidationError

# Currency minor unit (cents).
MINOR_UNIT = Decimal("0.01")


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative price in a single currency, held in whole cents.

    Line extensions and order totals are built with ``*`` and ``+`` only,
    so every total is an exact sum of its parts.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        amount = self.amount
        if not isinstance(amount, Decimal):
            raise ValidationError(f"Price must be a Decimal, got {type(amount).__name__}")
        if not amount.is_finite() or amount < 0:
            raise ValidationError(f"Price must be a finite, non-negative amount, got {amount}")
        try:
            in_cents = amount.quantize(MINOR_UNIT)
        except InvalidOperation as exc:
            raise ValidationError(f"Price is too large: {amount}") from exc
        if amount != in_cents:
            raise ValidationError(f"Price has more than two decimal places: {amount}")

    @classmethod
    def zero(cls, currency: str = "USD") -> Money:
        return cls(Decimal("0.00"), currency)

    @classmethod
    def of(cls, raw: str | int | float | Decimal) -> Money:
        """Parse a price as typed by a person, rounding half-up to cents."""
        try:
            amount = Decimal(str(raw).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {raw!r}") from exc
        if amount.is_finite():
            try:
                amount = amount.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)
            except InvalidOperation as exc:
                raise ValidationError(f"Money amount is too large: {raw!r}") from exc
        return cls(amount)

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same_currency(other).amount, self.currency)

    def __mul__(self, units: int) -> Money:
        if isinstance(units, bool) or not isinstance(units, int):
            raise TypeError(f"Money can only be multiplied by a whole number of units, got {units!r}")
        return Money(self.amount * units, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same_currency(other).amount

    def __str__(self) -> str:
        return f"${self.to_plain()}"

    def to_plain(self) -> str:
        """Two-decimal amount without a symbol, e.g. ``"30.00"``."""
        return f"{self.amount:.2f}"

    def _same_currency(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other


@dataclass(frozen=True)
class Quantity:
    """Units of one product on a cart line; always a positive integer."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(f"Quantity must be a whole number, got {self.value!r}")
        if self.value < 1:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
