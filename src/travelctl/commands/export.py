"""Command group: export travel data."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from travelctl.commands._base import TravelGroup

if TYPE_CHECKING:
    from travelctl.commands._context import AppContext

_EXPORT_EXAMPLES = """\
  travelctl export csv
  travelctl export csv --output ~/Desktop
  travelctl export csv --output backup.csv"""


@click.group(cls=TravelGroup, examples=_EXPORT_EXAMPLES)
def export() -> None:
    """Export statuses and visits."""


@export.command(
    examples="""\
  travelctl export csv > travel.csv
  travelctl export csv --output ~/Desktop
  travelctl export csv --output backup.csv"""
)
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="File to write, or a directory for travel-history-<date>.csv (default: stdout).",
)
@click.pass_obj
def csv(app: AppContext, output: Path | None) -> None:
    """Export statuses and visits as CSV."""
    from travelctl.services.transfer import TransferService

    svc = TransferService(app.store)
    if output is None:
        result = svc.export_csv()
        app.emit(result, raw=result.data.get("content"))
    else:
        app.emit(svc.write_export(output))
