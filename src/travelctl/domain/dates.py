"""Partial travel dates and their display formatting.

A travel date is recorded at one of three precisions (year, month, day).
The stored :class:`PartialDate` only carries the fields that precision
needs; the precision itself travels alongside as a
:class:`~travelctl.domain.types.Granularity` tag, which is authoritative.

Sorting uses :func:`sort_instant`, which fills missing fields with 1, so a
year-only date sorts as January 1 of that year.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from travelctl.domain.types import Granularity

MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_PARTIAL_DATE_RE = re.compile(r"^(\d{1,4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?$")


class PartialDate(BaseModel):
    """A calendar date whose month and day may be omitted."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=1, le=9999)
    month: int | None = Field(default=None, ge=1, le=12)
    day: int | None = Field(default=None, ge=1, le=31)

    @model_validator(mode="after")
    def _check_calendar(self) -> Self:
        if self.day is None:
            return self
        if self.month is None:
            msg = "day requires month"
            raise ValueError(msg)
        try:
            date(self.year, self.month, self.day)
        except ValueError as exc:
            msg = f"invalid day {self.year}-{self.month:02d}-{self.day:02d}: {exc}"
            raise ValueError(msg) from exc
        return self

    @property
    def granularity(self) -> Granularity:
        """Precision implied by which fields are populated."""
        if self.day is not None:
            return Granularity.DAY
        if self.month is not None:
            return Granularity.MONTH
        return Granularity.YEAR

    def truncated(self, granularity: Granularity) -> tuple[int, ...]:
        """Comparison key keeping only the fields *granularity* covers."""
        if granularity == Granularity.YEAR:
            return (self.year,)
        if granularity == Granularity.MONTH:
            return (self.year, self.month or 1)
        return (self.year, self.month or 1, self.day or 1)

    def to_dict(self) -> dict[str, int]:
        return self.model_dump(exclude_none=True)

    def isoformat(self) -> str:
        """``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD`` depending on populated fields."""
        text = f"{self.year:04d}"
        if self.month is not None:
            text += f"-{self.month:02d}"
        if self.day is not None:
            text += f"-{self.day:02d}"
        return text

    @classmethod
    def parse(cls, text: str) -> PartialDate:
        """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``.

        Raises:
            ValueError: If *text* is not in one of those shapes or names
                an impossible date.
        """
        match = _PARTIAL_DATE_RE.match(text.strip())
        if match is None:
            msg = f"Invalid date: {text!r}. Use YYYY, YYYY-MM or YYYY-MM-DD"
            raise ValueError(msg)
        year, month, day = (int(part) if part else None for part in match.groups())
        return cls(year=year, month=month, day=day)


def format_date(value: PartialDate, granularity: Granularity) -> str:
    """Format *value* for display at *granularity*.

    Falls back to the bare year when the fields *granularity* needs are
    missing.
    """
    if granularity == Granularity.MONTH and value.month is not None:
        return f"{MONTH_NAMES[value.month - 1]} {value.year}"
    if granularity == Granularity.DAY and value.month is not None and value.day is not None:
        return f"{MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"
    return str(value.year)


def format_visit_range(
    arrival: PartialDate,
    departure: PartialDate | None,
    granularity: Granularity,
) -> str:
    """Format an arrival/departure pair, collapsing identical ends."""
    start = format_date(arrival, granularity)
    if departure is None:
        return start
    end = format_date(departure, granularity)
    if start == end:
        return start
    return f"{start} - {end}"


def sort_instant(value: PartialDate) -> date:
    """Sortable instant for *value*; missing month and day default to 1."""
    return date(value.year, value.month or 1, value.day or 1)
