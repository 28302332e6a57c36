"""Command group: track visas and their expiry urgency."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from travelctl.commands._base import TravelGroup
from travelctl.domain.types import VisaType

if TYPE_CHECKING:
    from travelctl.commands._context import AppContext

_ISO_DATE = click.DateTime(formats=["%Y-%m-%d"])

_VISA_EXAMPLES = """\
  travelctl visa add US --type tourist --issue 2024-01-10 --expiry 2034-01-09 --max-stay 180
  travelctl visa add FR --issue 2025-03-01 --expiry 2025-09-01 --max-stay 90 --used 30 --schengen
  travelctl visa list
  travelctl visa list --today 2025-06-01
  travelctl visa delete visa_1a2b3c4d"""


@click.group(cls=TravelGroup, examples=_VISA_EXAMPLES)
def visa() -> None:
    """Record visas and rank them by how soon they need attention."""


@visa.command(
    examples="""\
  travelctl visa add US --issue 2024-01-10 --expiry 2034-01-09 --max-stay 180
  travelctl visa add DE --type business --issue 2025-01-01 --expiry 2026-01-01 \\
      --max-stay 90 --used 12 --schengen --multiple-entry"""
)
@click.argument("code")
@click.option(
    "--type",
    "visa_type",
    type=click.Choice([kind.value for kind in VisaType], case_sensitive=False),
    default=VisaType.TOURIST.value,
    show_default=True,
    help="Visa category.",
)
@click.option("--issue", "issue_date", type=_ISO_DATE, required=True, help="Issue date.")
@click.option("--expiry", "expiry_date", type=_ISO_DATE, required=True, help="Expiry date.")
@click.option(
    "--max-stay",
    "max_stay_days",
    type=click.IntRange(min=0),
    required=True,
    help="Maximum days of stay allowed.",
)
@click.option(
    "--used",
    "total_days_used",
    type=click.IntRange(min=0),
    default=0,
    help="Days of stay already used (Schengen: across all member states).",
)
@click.option("--schengen", "is_schengen", is_flag=True, help="Schengen-area visa.")
@click.option("--multiple-entry", is_flag=True, help="Allows multiple entries.")
@click.option("--note", default=None, help="Free-text note.")
@click.pass_obj
def add(
    app: AppContext,
    code: str,
    visa_type: str,
    issue_date: datetime,
    expiry_date: datetime,
    max_stay_days: int,
    total_days_used: int,
    is_schengen: bool,
    multiple_entry: bool,
    note: str | None,
) -> None:
    """Record a visa for country CODE."""
    from travelctl.services.visas import VisaService

    app.emit(
        VisaService(app.store).add_visa(
            code,
            visa_type=visa_type.lower(),
            issue_date=issue_date.date(),
            expiry_date=expiry_date.date(),
            max_stay_days=max_stay_days,
            total_days_used=total_days_used,
            is_schengen=is_schengen,
            multiple_entry=multiple_entry,
            note=note,
        )
    )


@visa.command(examples="  travelctl visa delete visa_1a2b3c4d")
@click.argument("visa_id")
@click.pass_obj
def delete(app: AppContext, visa_id: str) -> None:
    """Delete visa VISA_ID."""
    from travelctl.services.visas import VisaService

    app.emit(VisaService(app.store).delete_visa(visa_id))


@visa.command(
    "list",
    examples="""\
  travelctl visa list
  travelctl visa list --today 2025-06-01
  travelctl --json visa list""",
)
@click.option(
    "--today",
    type=_ISO_DATE,
    default=None,
    help="Reference date for countdowns (default: today).",
)
@click.pass_obj
def list_cmd(app: AppContext, today: datetime | None) -> None:
    """List active visas by urgency, then expired visas."""
    from travelctl.services.visas import VisaService

    app.emit(VisaService(app.store).overview(today=today.date() if today else None))
