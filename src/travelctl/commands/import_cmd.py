"""Command group: import travel data."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from travelctl.commands._base import TravelGroup

if TYPE_CHECKING:
    from travelctl.commands._context import AppContext

_IMPORT_EXAMPLES = """\
  travelctl import csv travel-history-2024-05-01.csv
  travelctl import csv backup.csv --replace"""


@click.group("import", cls=TravelGroup, examples=_IMPORT_EXAMPLES)
def import_cmd() -> None:
    """Import statuses and visits."""


@import_cmd.command(
    examples="""\
  travelctl import csv travel-history-2024-05-01.csv
  travelctl import csv backup.csv --replace
  travelctl --json import csv backup.csv"""
)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--replace",
    is_flag=True,
    help="Replace all statuses and visits instead of merging.",
)
@click.pass_obj
def csv(app: AppContext, path: Path, replace: bool) -> None:
    """Import a CSV export from PATH.

    Rows that cannot be read are skipped and reported as warnings. A file
    without a header and at least one row imports nothing.
    """
    from travelctl.services.transfer import TransferService

    app.emit(TransferService(app.store).import_file(path, replace=replace))
