"""Clock port.

The domain never reads wall-clock time itself. Whoever builds a
PriceTimeline hands it something that answers ``now()``.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol

from redpencil.domain.exceptions import InvalidArgumentError


class Clock(Protocol):
    """Source of the current instant (timezone-aware)."""

    def now(self) -> datetime:
        ...


class ManualClock:
    """A clock that only moves when told to.

    Used to replay a price history and to pin time down in tests.
    """

    def __init__(self, start: datetime) -> None:
        self._current = start

    def now(self) -> datetime:
        return self._current

    def set(self, instant: datetime) -> None:
        self._current = instant

    def advance(self, days: float = 0, hours: float = 0) -> None:
        delta = timedelta(days=days, hours=hours)
        if delta < timedelta(0):
            raise InvalidArgumentError("ManualClock cannot move backwards")
        self._current += delta
