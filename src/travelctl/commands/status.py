"""Command group: mark countries as visited, wishlisted, or neither."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from travelctl.commands._base import TravelGroup
from travelctl.domain.types import CountryStatus

if TYPE_CHECKING:
    from travelctl.commands._context import AppContext

_STATUS_CHOICE = click.Choice([status.value for status in CountryStatus], case_sensitive=False)

_STATUS_EXAMPLES = """\
  travelctl status set FR visited
  travelctl status set jp wishlist
  travelctl status set FR none
  travelctl status list --status visited"""


@click.group(cls=TravelGroup, examples=_STATUS_EXAMPLES)
def status() -> None:
    """Set and list country statuses."""


@status.command(
    "set",
    examples="""\
  travelctl status set FR visited
  travelctl --json status set JP wishlist""",
)
@click.argument("code")
@click.argument("value", type=_STATUS_CHOICE)
@click.pass_obj
def set_cmd(app: AppContext, code: str, value: str) -> None:
    """Set the status of country CODE (ISO alpha-2)."""
    from travelctl.services.tracking import TrackingService

    app.emit(TrackingService(app.store).set_status(code, value.lower()))


@status.command(
    "list",
    examples="""\
  travelctl status list
  travelctl status list --status wishlist""",
)
@click.option(
    "--status", "status_filter", type=_STATUS_CHOICE, default=None, help="Filter by status."
)
@click.pass_obj
def list_cmd(app: AppContext, status_filter: str | None) -> None:
    """List countries that have a status."""
    from travelctl.services.tracking import TrackingService

    app.emit(
        TrackingService(app.store).list_statuses(
            status=status_filter.lower() if status_filter else None
        )
    )
