"""Promotion rules.

The anti-abuse thresholds live in one immutable object that is handed to
each PriceTimeline, so a deployment (or a test) can tune them without
touching module state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

from redpencil.domain.exceptions import InvalidArgumentError

# ---------------------------------------------------------------------------
# Defaults for business rules
# ---------------------------------------------------------------------------
PROMOTION_LENGTH = timedelta(days=30)
GRACE_PERIOD = timedelta(days=30)
STABILITY_WINDOW = timedelta(days=30)
MIN_DISCOUNT_PERCENT = Decimal("5")
MAX_DISCOUNT_PERCENT = Decimal("30")


@dataclass(frozen=True)
class PromotionRules:
    """Thresholds that decide when a red pencil promotion may run.

    Invariants:
    - ``0 <= min_discount_percent <= max_discount_percent < 100``
    - ``promotion_length`` is positive, the other durations are >= 0
    """

    min_discount_percent: Decimal = MIN_DISCOUNT_PERCENT
    max_discount_percent: Decimal = MAX_DISCOUNT_PERCENT
    promotion_length: timedelta = PROMOTION_LENGTH
    cooldown: timedelta = GRACE_PERIOD
    stability_window: timedelta = STABILITY_WINDOW

    def __post_init__(self) -> None:
        low = Decimal(self.min_discount_percent)
        high = Decimal(self.max_discount_percent)
        bounds_ok = low.is_finite() and high.is_finite() and 0 <= low <= high < 100
        if not bounds_ok:
            raise InvalidArgumentError(
                f"Discount bounds must satisfy 0 <= min <= max < 100, "
                f"got min={low} max={high}"
            )
        object.__setattr__(self, "min_discount_percent", low)
        object.__setattr__(self, "max_discount_percent", high)

        if self.promotion_length <= timedelta(0):
            raise InvalidArgumentError("promotion_length must be positive")
        for name in ("cooldown", "stability_window"):
            if getattr(self, name) < timedelta(0):
                raise InvalidArgumentError(f"{name} cannot be negative")

    @property
    def lowest_percent_of_price(self) -> Decimal:
        """Deepest allowed markdown, as a percentage of the reference price."""
        return 100 - self.max_discount_percent

    @property
    def highest_percent_of_price(self) -> Decimal:
        """Shallowest markdown that still counts, as a percentage."""
        return 100 - self.min_discount_percent


DEFAULT_RULES = PromotionRules()
