"""Visit records, the visit store shape, and the export dataset.

Two maps are kept side by side and never folded into one:

- ``country_statuses``: country code -> :class:`CountryStatus`
- ``visit_dates``: country code -> ordered list of :class:`VisitRecord`

A country may be ``visited`` with no recorded visits, and a country may
keep its visits after being demoted to ``none`` or ``wishlist``. Status
changes never touch visit history.

Store operations are pure: they return new mappings and leave their
inputs untouched.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from travelctl.domain.dates import PartialDate, format_visit_range
from travelctl.domain.types import CountryStatus, Granularity, Transportation

StatusMap = dict[str, CountryStatus]


class VisitRecord(BaseModel):
    """One recorded stay in a country. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    arrival_date: PartialDate
    departure_date: PartialDate | None = None
    granularity: Granularity
    transportation: Transportation | None = None
    note: str | None = None

    @field_validator("note")
    @classmethod
    def _blank_note_is_absent(cls, value: str | None) -> str | None:
        return value or None

    @model_validator(mode="after")
    def _check_granularity(self) -> Self:
        for label, value in (("arrival", self.arrival_date), ("departure", self.departure_date)):
            if value is not None and value.granularity != self.granularity:
                msg = (
                    f"{label} date {value.isoformat()} does not match "
                    f"{self.granularity.value} granularity"
                )
                raise ValueError(msg)
        departure = self.departure_date
        if departure is not None and departure.truncated(self.granularity) < (
            self.arrival_date.truncated(self.granularity)
        ):
            msg = (
                f"departure {departure.isoformat()} is before "
                f"arrival {self.arrival_date.isoformat()}"
            )
            raise ValueError(msg)
        return self

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


VisitMap = dict[str, list[VisitRecord]]


class ExportDataset(BaseModel):
    """Statuses plus visits: the unit of CSV round-trip."""

    country_statuses: StatusMap = Field(default_factory=dict)
    visit_dates: VisitMap = Field(default_factory=dict)

    @property
    def visit_count(self) -> int:
        return sum(len(visits) for visits in self.visit_dates.values())


def format_visit(visit: VisitRecord) -> str:
    """Display label for a visit's date range."""
    return format_visit_range(visit.arrival_date, visit.departure_date, visit.granularity)


def set_status(
    statuses: Mapping[str, CountryStatus],
    country_code: str,
    status: CountryStatus,
) -> StatusMap:
    """Return a copy of *statuses* with *country_code* set to *status*."""
    return {**statuses, country_code: status}


def add_visit(
    visit_dates: Mapping[str, Sequence[VisitRecord]],
    country_code: str,
    visit: VisitRecord,
) -> VisitMap:
    """Return a copy of *visit_dates* with *visit* appended for *country_code*.

    Raises:
        ValueError: If a visit with the same ID is already recorded for
            the country.
    """
    existing = list(visit_dates.get(country_code, []))
    if any(v.id == visit.id for v in existing):
        msg = f"Visit {visit.id} already recorded for {country_code}"
        raise ValueError(msg)
    copied = {code: list(visits) for code, visits in visit_dates.items()}
    copied[country_code] = [*existing, visit]
    return copied


def delete_visit(
    visit_dates: Mapping[str, Sequence[VisitRecord]],
    country_code: str,
    visit_id: str,
) -> VisitMap:
    """Return a copy of *visit_dates* without visit *visit_id* for *country_code*.

    Unknown IDs leave the mapping unchanged.
    """
    copied = {code: list(visits) for code, visits in visit_dates.items()}
    if country_code in copied:
        copied[country_code] = [v for v in copied[country_code] if v.id != visit_id]
    return copied


def merge_datasets(base: ExportDataset, incoming: ExportDataset) -> ExportDataset:
    """Merge *incoming* into *base*.

    Incoming statuses overwrite per country. Incoming visits are appended
    after existing ones, skipping IDs already recorded for that country.
    """
    statuses: StatusMap = {**base.country_statuses, **incoming.country_statuses}
    visits: VisitMap = {code: list(v) for code, v in base.visit_dates.items()}
    for code, records in incoming.visit_dates.items():
        current = visits.setdefault(code, [])
        known = {v.id for v in current}
        for record in records:
            if record.id not in known:
                current.append(record)
                known.add(record.id)
    return ExportDataset(country_statuses=statuses, visit_dates=visits)
