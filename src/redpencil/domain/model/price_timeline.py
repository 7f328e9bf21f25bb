"""PriceTimeline aggregate: the red pencil rule engine.

A PriceTimeline tracks one product's price over time and decides, on
every price change, whether a red pencil promotion starts, is forced to
end, or carries on. All time comes from an injected Clock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from redpencil.domain.clock import Clock
from redpencil.domain.exceptions import InvalidArgumentError
from redpencil.domain.model.promotion import PromotionPeriod
from redpencil.domain.model.rules import DEFAULT_RULES, PromotionRules
from redpencil.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


@dataclass
class PriceTimeline:
    """Aggregate root for a product's price history.

    Use the ``PriceTimeline.create()`` factory for new products. The
    ``__init__`` is intentionally simple so a caller can rebuild a
    timeline from known state without replaying it; it only checks that a
    promotion still running has the baseline it was started from.

    ``promotion_baseline`` holds the pre-discount price while a promotion
    runs; outside a promotion the baseline is simply the current price.
    Queries never mutate: whether a promotion is still running is always
    worked out from its end instant and the clock.
    """

    clock: Clock
    current_price: Money
    last_changed_at: datetime
    current_promotion: PromotionPeriod
    promotion_baseline: Money | None = None
    rules: PromotionRules = DEFAULT_RULES

    def __post_init__(self) -> None:
        if self.promotion_baseline is None and self.current_promotion.is_active(
            self.clock.now()
        ):
            raise InvalidArgumentError(
                "A timeline with a running promotion needs its promotion_baseline"
            )

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        initial_price: Money,
        clock: Clock,
        rules: PromotionRules = DEFAULT_RULES,
    ) -> PriceTimeline:
        """Start tracking a product at *initial_price*.

        The product gets a promotion period that is ended on the spot, so
        the usual cooldown keeps it from being promoted straight after it
        is listed.
        """
        now = clock.now()
        blocker = PromotionPeriod.start(now, rules.promotion_length)
        blocker.end_now(now)
        return PriceTimeline(
            clock=clock,
            current_price=initial_price,
            last_changed_at=now,
            current_promotion=blocker,
            rules=rules,
        )

    # --- Queries --------------------------------------------------------------

    def get_price(self) -> Money:
        return self.current_price

    def get_price_update_time(self) -> datetime:
        return self.last_changed_at

    def is_promoted(self) -> bool:
        return self.is_promoted_at(self.clock.now())

    def is_promoted_at(self, now: datetime) -> bool:
        return self.current_promotion.is_active(now)

    @property
    def baseline_price(self) -> Money:
        """Reference price for discount checks at the current instant."""
        return self.baseline_price_at(self.clock.now())

    def baseline_price_at(self, now: datetime) -> Money:
        if self.promotion_baseline is not None and self.is_promoted_at(now):
            return self.promotion_baseline
        return self.current_price

    # --- Commands -------------------------------------------------------------

    def set_price(self, new_price: Money) -> None:
        """Change the price, starting or ending a promotion as the rules say.

        Ending is checked first: a change that breaks a running promotion
        never starts a new one in the same call.
        """
        now = self.clock.now()

        if self.is_promoted_at(now):
            if self._breaks_promotion(new_price, now):
                self._end_promotion(new_price, now)
        elif self._can_start_promotion(new_price, now):
            self._start_promotion(now)

        self.current_price = new_price
        self.last_changed_at = now

    # --- Rules ----------------------------------------------------------------

    def _breaks_promotion(self, new_price: Money, now: datetime) -> bool:
        """A raise, or a cut past the deepest allowed discount, ends it."""
        if new_price >= self.current_price:
            return True
        baseline = self.baseline_price_at(now)
        return not new_price.is_at_least_percent_of(
            self.rules.lowest_percent_of_price, baseline
        )

    def _can_start_promotion(self, new_price: Money, now: datetime) -> bool:
        if self.last_changed_at > now - self.rules.stability_window:
            logger.debug(
                "No promotion at %s: price last changed at %s",
                new_price, self.last_changed_at,
            )
            return False

        if not self.current_promotion.grace_period_over(now, self.rules.cooldown):
            logger.debug(
                "No promotion at %s: cooldown since %s not over",
                new_price, self.current_promotion.ends_at,
            )
            return False

        # Percentages are only computed once the timing checks pass, so a
        # zero price raises DivisionByZeroError here and nowhere earlier.
        in_range = new_price.is_at_least_percent_of(
            self.rules.lowest_percent_of_price, self.current_price
        ) and new_price.is_at_most_percent_of(
            self.rules.highest_percent_of_price, self.current_price
        )
        if not in_range:
            logger.debug(
                "No promotion at %s: discount from %s out of range",
                new_price, self.current_price,
            )
        return in_range

    # --- Internal helpers -----------------------------------------------------

    def _start_promotion(self, now: datetime) -> None:
        self.promotion_baseline = self.current_price
        self.current_promotion = PromotionPeriod.start(now, self.rules.promotion_length)
        logger.info(
            "Red pencil promotion started at %s from baseline %s",
            now.isoformat(), self.promotion_baseline,
        )

    def _end_promotion(self, new_price: Money, now: datetime) -> None:
        self.current_promotion.end_now(now)
        self.promotion_baseline = None
        logger.info(
            "Red pencil promotion ended early at %s by price change to %s",
            now.isoformat(), new_price,
        )
