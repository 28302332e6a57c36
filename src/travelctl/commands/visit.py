"""Command group: record, remove and list visits to a country."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from travelctl.commands._base import TravelGroup
from travelctl.domain.types import Transportation

if TYPE_CHECKING:
    from travelctl.commands._context import AppContext

_VISIT_EXAMPLES = """\
  travelctl visit add FR --arrival 2019-07
  travelctl visit add JP --arrival 2023-04-02 --departure 2023-04-16 --transport plane
  travelctl visit add IT --arrival 2018 --note "Rome, Florence"
  travelctl visit list FR
  travelctl visit delete FR 1700000000000"""


@click.group(cls=TravelGroup, examples=_VISIT_EXAMPLES)
def visit() -> None:
    """Record visits with year, month or day precision."""


@visit.command(
    examples="""\
  travelctl visit add FR --arrival 2019
  travelctl visit add FR --arrival 2019-07 --departure 2019-08
  travelctl visit add FR --arrival 2019-07-05 --departure 2019-07-12 --transport train"""
)
@click.argument("code")
@click.option(
    "--arrival",
    required=True,
    help="Arrival as YYYY, YYYY-MM or YYYY-MM-DD; sets the visit's precision.",
)
@click.option("--departure", default=None, help="Departure, same precision as --arrival.")
@click.option(
    "--transport",
    "transportation",
    type=click.Choice([mode.value for mode in Transportation], case_sensitive=False),
    default=None,
    help="How you travelled.",
)
@click.option("--note", default=None, help="Free-text note.")
@click.option("--id", "visit_id", default=None, help="Explicit visit ID (default: timestamp).")
@click.pass_obj
def add(
    app: AppContext,
    code: str,
    arrival: str,
    departure: str | None,
    transportation: str | None,
    note: str | None,
    visit_id: str | None,
) -> None:
    """Record a visit to country CODE."""
    from travelctl.services.tracking import TrackingService

    app.emit(
        TrackingService(app.store).add_visit(
            code,
            arrival,
            departure=departure,
            transportation=transportation.lower() if transportation else None,
            note=note,
            visit_id=visit_id,
        )
    )


@visit.command(examples="  travelctl visit delete FR 1700000000000")
@click.argument("code")
@click.argument("visit_id")
@click.pass_obj
def delete(app: AppContext, code: str, visit_id: str) -> None:
    """Delete visit VISIT_ID from country CODE."""
    from travelctl.services.tracking import TrackingService

    app.emit(TrackingService(app.store).delete_visit(code, visit_id))


@visit.command(
    "list",
    examples="""\
  travelctl visit list FR
  travelctl -q visit list FR""",
)
@click.argument("code")
@click.pass_obj
def list_cmd(app: AppContext, code: str) -> None:
    """List the visits recorded for country CODE."""
    from travelctl.services.tracking import TrackingService

    app.emit(TrackingService(app.store).list_visits(code))
