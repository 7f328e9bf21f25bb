"""CLI commands for replaying a product's price timeline."""

from __future__ import annotations

from decimal import Decimal

import click

from redpencil.application.dto import PriceChangeSpec, TimelineReportDTO
from redpencil.application.simulate_history import SimulateHistoryHandler
from redpencil.domain.exceptions import DomainException
from redpencil.domain.model.rules import (
    MAX_DISCOUNT_PERCENT,
    MIN_DISCOUNT_PERCENT,
    PromotionRules,
)
from redpencil.infrastructure.clock import SystemClock


def _parse_change(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> list[PriceChangeSpec]:
    """Turn repeated DAY:PRICE options into PriceChangeSpecs."""
    changes: list[PriceChangeSpec] = []
    for raw in values:
        day, sep, price = raw.partition(":")
        if not sep or not price:
            raise click.BadParameter(f"expected DAY:PRICE, got {raw!r}")
        try:
            changes.append(PriceChangeSpec(day=int(day), price=price))
        except ValueError:
            raise click.BadParameter(f"DAY must be a whole number, got {day!r}")
    return changes


@click.command("simulate")
@click.option("--price", required=True, help="Initial price (e.g. 100.00).")
@click.option(
    "--change",
    "changes",
    multiple=True,
    callback=_parse_change,
    help="Price change as DAY:PRICE, days counted from listing. Repeatable.",
)
@click.option(
    "--at", "query_days", multiple=True, type=int,
    help="Day to report status for. Repeatable.",
)
@click.option(
    "--min-discount", type=float, default=float(MIN_DISCOUNT_PERCENT),
    show_default=True, help="Smallest markdown, in percent.",
)
@click.option(
    "--max-discount", type=float, default=float(MAX_DISCOUNT_PERCENT),
    show_default=True, help="Largest markdown, in percent.",
)
def timeline_simulate(
    price: str,
    changes: list[PriceChangeSpec],
    query_days: tuple[int, ...],
    min_discount: float,
    max_discount: float,
) -> None:
    """Replay price changes and show when the product is promoted."""
    try:
        rules = PromotionRules(
            min_discount_percent=Decimal(str(min_discount)),
            max_discount_percent=Decimal(str(max_discount)),
        )
        handler = SimulateHistoryHandler(rules=rules)
        report = handler.handle(
            initial_price=price,
            changes=changes,
            start=SystemClock().now(),
            query_days=list(query_days),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_report(report)


def _print_report(report: TimelineReportDTO) -> None:
    click.echo(f"Listed at {report.initial_price} on {report.started_at}")

    if report.steps:
        click.echo(f"{'Day':>5} {'Price':>10} {'Baseline':>10}  Promoted")
        click.echo("-" * 37)
        for step in report.steps:
            flag = "yes" if step.promoted else "no"
            click.echo(f"{step.day:>5} {step.price:>10} {step.baseline:>10}  {flag}")

    for status in report.statuses:
        state = "promoted" if status.promoted else "not promoted"
        click.echo(f"Day {status.day}: {status.price} {state}")
