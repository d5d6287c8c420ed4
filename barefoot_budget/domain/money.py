"""Integer-cent money value type"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from functools import total_ordering

from barefoot_budget.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "AUD"


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, ties away from zero.

    Unlike round(), which rounds ties to even (round(2.5) == 2).
    The float is converted to Decimal exactly: 2.5 -> 3, 2.4999999 -> 2.

    Matches JavaScript Math.round only for non-negative values; negative ties
    differ (Math.round(-2.5) == -2, round_half_up(-2.5) == -3). Simulation
    inputs are always non-negative.
    """
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _floor_cents(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


@total_ordering
@dataclass(frozen=True)
class Money:
    """
    Immutable monetary amount stored as integer cents.

    Example:
        Money(5000) -> $50.00 AUD
        Money(5000).add(Money(1000)) -> $60.00 AUD
    """

    cents: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        # bool is an int subclass; reject it explicitly
        if not isinstance(self.cents, int) or isinstance(self.cents, bool):
            raise ValidationError("Money expects an integer number of cents")

    def add(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.cents + other.cents, self.currency)

    def subtract(self, other: "Money") -> "Money":
        self._check_currency(other)
        return Money(self.cents - other.cents, self.currency)

    def negate(self) -> "Money":
        return Money(-self.cents, self.currency)

    def multiply(self, factor: float) -> "Money":
        """
        Multiply by factor, flooring any fractional cent.

        The factor goes through its shortest repr so 100 * 0.57 is 57, not 56.
        """
        return Money(_floor_cents(Decimal(self.cents) * Decimal(str(factor))), self.currency)

    def divide(self, divisor: float) -> "Money":
        """Divide by divisor, flooring any fractional cent"""
        if divisor == 0:
            raise ValidationError("Cannot divide by zero")
        return Money(_floor_cents(Decimal(self.cents) / Decimal(str(divisor))), self.currency)

    def is_zero(self) -> bool:
        return self.cents == 0

    def __lt__(self, other: "Money") -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return self.cents < other.cents

    def __str__(self) -> str:
        sign = "-" if self.cents < 0 else ""
        dollars, cents = divmod(abs(self.cents), 100)
        return f"{sign}${dollars}.{cents:02d} {self.currency}"

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot operate on different currencies: {self.currency} vs {other.currency}"
            )
