"""PromotionPeriod: one red pencil promotion's lifecycle.

A period runs from ``started_at`` until ``ends_at``. It ends naturally
once the clock passes ``ends_at``; it can also be cut short with
``end_now()``, which only ever moves ``ends_at`` earlier.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from redpencil.domain.exceptions import InvalidArgumentError, InvalidStateError
from redpencil.domain.model.rules import GRACE_PERIOD, PROMOTION_LENGTH


@dataclass
class PromotionPeriod:
    """Start and end instants of a single promotion.

    Use ``PromotionPeriod.start()`` for new periods.

    Invariants:
    - ``started_at <= ends_at <= started_at + length``
    """

    started_at: datetime
    ends_at: datetime
    length: timedelta = PROMOTION_LENGTH

    def __post_init__(self) -> None:
        if self.length <= timedelta(0):
            raise InvalidArgumentError("Promotion length must be positive")
        if not self.started_at <= self.ends_at <= self.started_at + self.length:
            raise InvalidArgumentError(
                f"Promotion must end between {self.started_at.isoformat()} "
                f"and {(self.started_at + self.length).isoformat()}, "
                f"got {self.ends_at.isoformat()}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def start(now: datetime, length: timedelta = PROMOTION_LENGTH) -> PromotionPeriod:
        return PromotionPeriod(started_at=now, ends_at=now + length, length=length)

    # --- Queries --------------------------------------------------------------

    @property
    def natural_end(self) -> datetime:
        return self.started_at + self.length

    @property
    def ended_early(self) -> bool:
        """True if ``end_now()`` cut this period short."""
        return self.ends_at < self.natural_end

    def is_active(self, now: datetime) -> bool:
        return now < self.ends_at

    def grace_period_over(self, now: datetime, cooldown: timedelta = GRACE_PERIOD) -> bool:
        """True once *cooldown* has passed since this period ended.

        Measured from ``ends_at``, so a promotion that was forced to end
        early starts its cooldown at that moment.
        """
        return self.ends_at <= now - cooldown

    # --- State transitions ----------------------------------------------------

    def end_now(self, now: datetime) -> None:
        """Force the promotion to end at *now*."""
        if not self.is_active(now):
            raise InvalidStateError(
                "Attempting to end a promotion that is already over"
            )
        if now < self.started_at:
            raise InvalidStateError("Cannot end a promotion before it started")
        self.ends_at = now
