"""Command: travel statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from travelctl.commands._base import TravelCommand

if TYPE_CHECKING:
    from travelctl.commands._context import AppContext


@click.command(
    cls=TravelCommand,
    examples="""\
  travelctl stats
  travelctl stats --top 10
  travelctl --json stats""",
)
@click.option(
    "--top",
    type=int,
    default=None,
    help="How many most-visited countries to list (default from config).",
)
@click.pass_obj
def stats(app: AppContext, top: int | None) -> None:
    """Show counts, per-region progress, transport usage and top countries."""
    from travelctl.services.insights import InsightsService

    app.emit(InsightsService(app.store).stats(top=top))
