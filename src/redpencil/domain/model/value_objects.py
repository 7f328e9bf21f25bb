"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext

from redpencil.domain.exceptions import DivisionByZeroError, InvalidArgumentError

# Banker's rounding, the usual choice for currency.
ROUNDING_MODE = ROUND_HALF_EVEN

# Prices are kept to the cent.
CURRENCY_PRECISION = Decimal("0.01")

# Ratios are rounded to four places before being turned into percentages.
DIVISION_PRECISION = Decimal("0.0001")


def _digits_needed(*values: Decimal) -> int:
    """Context precision that keeps every digit of *values* at cent scale."""
    return max(28, max(v.adjusted() for v in values) + 8)


@dataclass(frozen=True)
class Money:
    """A non-negative monetary amount, rounded to the cent.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable when comparing discount percentages at their boundaries.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidArgumentError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise InvalidArgumentError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise InvalidArgumentError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        with localcontext() as ctx:
            ctx.prec = _digits_needed(self.amount)
            rounded = self.amount.quantize(CURRENCY_PRECISION, ROUNDING_MODE)
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "amount", rounded)

    # --- Percentages ----------------------------------------------------------

    def percent_of(self, base: Money) -> Decimal:
        """Return this amount as a percentage of *base*.

        The ratio is rounded half-even to four places before scaling, so
        ``Money.of("95.01").percent_of(Money.of("100"))`` is exactly 95.01.
        """
        if base.amount == 0:
            raise DivisionByZeroError(f"Cannot take a percentage of {base}")
        with localcontext() as ctx:
            ctx.prec = max(28, self.amount.adjusted() - base.amount.adjusted() + 10)
            ratio = (self.amount / base.amount).quantize(DIVISION_PRECISION, ROUNDING_MODE)
            return ratio * 100

    def is_at_least_percent_of(self, percent: Decimal | int, base: Money) -> bool:
        return self.percent_of(base) >= Decimal(percent)

    def is_at_most_percent_of(self, percent: Decimal | int, base: Money) -> bool:
        return self.percent_of(base) <= Decimal(percent)

    # --- Comparison -----------------------------------------------------------

    @staticmethod
    def compare(a: Money, b: Money) -> int:
        """Three-way comparison: -1, 0 or 1."""
        if a.amount < b.amount:
            return -1
        if a.amount > b.amount:
            return 1
        return 0

    def is_less_than(self, other: Money) -> bool:
        return Money.compare(self, other) < 0

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidArgumentError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def absolute_difference(a: Money, b: Money) -> Money:
        with localcontext() as ctx:
            ctx.prec = _digits_needed(a.amount, b.amount)
            return Money(abs(a.amount - b.amount))
