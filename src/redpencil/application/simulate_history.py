"""Application service: Simulate Price History use case.

Replays a list of price changes against a fresh PriceTimeline driven by
a ManualClock, and reports whether the product was on red pencil
promotion after each change and at each queried day.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from redpencil.application.dto import (
    PriceChangeSpec,
    PriceStepDTO,
    StatusDTO,
    TimelineReportDTO,
)
from redpencil.domain.clock import ManualClock
from redpencil.domain.exceptions import ValidationError
from redpencil.domain.model.price_timeline import PriceTimeline
from redpencil.domain.model.rules import DEFAULT_RULES, PromotionRules
from redpencil.domain.model.value_objects import Money


class SimulateHistoryHandler:

    def __init__(self, rules: PromotionRules = DEFAULT_RULES) -> None:
        self._rules = rules

    def handle(
        self,
        initial_price: str,
        changes: list[PriceChangeSpec],
        start: datetime,
        query_days: list[int] | None = None,
    ) -> TimelineReportDTO:
        """Replay *changes* and report the promotion status.

        Steps:
        1. Validate that change days are non-negative and in order.
        2. Create the timeline at *start* (timezone-aware, UTC).
        3. Move the clock to each change and apply it.
        4. Move the clock to each query day and read the status.
        """
        self._validate(changes, query_days or [])

        initial = Money.of(initial_price)
        clock = ManualClock(start)
        timeline = PriceTimeline.create(initial, clock, self._rules)

        steps: list[PriceStepDTO] = []
        for change in changes:
            clock.set(start + timedelta(days=change.day))
            timeline.set_price(Money.of(change.price))
            steps.append(
                PriceStepDTO(
                    day=change.day,
                    price=str(timeline.get_price()),
                    baseline=str(timeline.baseline_price),
                    promoted=timeline.is_promoted(),
                )
            )

        statuses: list[StatusDTO] = []
        for day in sorted(query_days or []):
            clock.set(start + timedelta(days=day))
            statuses.append(
                StatusDTO(
                    day=day,
                    price=str(timeline.get_price()),
                    promoted=timeline.is_promoted(),
                )
            )

        return TimelineReportDTO(
            initial_price=str(initial),
            started_at=start.strftime("%Y-%m-%d %H:%M UTC"),
            steps=steps,
            statuses=statuses,
        )

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _validate(changes: list[PriceChangeSpec], query_days: list[int]) -> None:
        previous = 0
        for change in changes:
            if change.day < 0:
                raise ValidationError(f"Day must not be negative, got {change.day}")
            if change.day < previous:
                raise ValidationError(
                    f"Price changes must be in day order ({change.day} after {previous})"
                )
            previous = change.day

        for day in query_days:
            if day < 0:
                raise ValidationError(f"Query day must not be negative, got {day}")
            if day < previous:
                raise ValidationError(
                    f"Cannot query day {day}, before the last price change on day {previous}"
                )
