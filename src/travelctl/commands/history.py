"""Command: chronological visit history."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from travelctl.commands._base import TravelCommand

if TYPE_CHECKING:
    from travelctl.commands._context import AppContext


@click.command(
    cls=TravelCommand,
    examples="""\
  travelctl history
  travelctl --json history
  travelctl -v history""",
)
@click.pass_obj
def history(app: AppContext) -> None:
    """Show visits to visited countries, most recent first."""
    from travelctl.services.insights import InsightsService

    app.emit(InsightsService(app.store).history())
