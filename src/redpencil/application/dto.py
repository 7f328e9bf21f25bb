"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceChangeSpec:
    """Input: set the price to *price* this many days after listing."""

    day: int
    price: str


@dataclass(frozen=True)
class PriceStepDTO:
    """Output: the timeline right after one price change."""

    day: int
    price: str  # formatted, e.g. "$75.00"
    baseline: str
    promoted: bool


@dataclass(frozen=True)
class StatusDTO:
    """Output: the promotion status at a queried day."""

    day: int
    price: str
    promoted: bool


@dataclass(frozen=True)
class TimelineReportDTO:
    """Output: a complete replay as displayed to the user."""

    initial_price: str
    started_at: str
    steps: list[PriceStepDTO]
    statuses: list[StatusDTO]
