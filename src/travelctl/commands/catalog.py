"""Command: browse the built-in country catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from travelctl.commands._base import TravelCommand

if TYPE_CHECKING:
    from travelctl.commands._context import AppContext


@click.command(
    cls=TravelCommand,
    examples="""\
  travelctl catalog
  travelctl catalog --region Europe
  travelctl -q catalog --region Oceania""",
)
@click.option("--region", default=None, help="Only countries in this region.")
@click.pass_obj
def catalog(app: AppContext, region: str | None) -> None:
    """List known countries with their codes and regions."""
    from travelctl.services.tracking import TrackingService

    app.emit(TrackingService(app.store).list_countries(region=region))
