import logging

import click

from redpencil.infrastructure.cli.timeline_commands import timeline_simulate


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log every promotion decision.")
def cli(verbose: bool) -> None:
    """Red Pencil: markdown promotion rules for a product's price history"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
cli.add_command(timeline_simulate)
