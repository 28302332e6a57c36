"""Chronological visit history across visited countries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date

from travelctl.domain.catalog import Country, CountryCatalog
from travelctl.domain.dates import sort_instant
from travelctl.domain.types import CountryStatus
from travelctl.domain.visits import VisitRecord, format_visit


@dataclass(frozen=True)
class HistoryEntry:
    """One visit placed on the timeline."""

    country_code: str
    country: Country
    visit: VisitRecord
    sort_instant: date

    @property
    def entry_id(self) -> str:
        return f"{self.country_code}-{self.visit.id}"

    @property
    def label(self) -> str:
        return format_visit(self.visit)


@dataclass(frozen=True)
class HistoryTimeline:
    """Timeline entries, most recent first."""

    entries: list[HistoryEntry] = field(default_factory=list)

    @property
    def total_visits(self) -> int:
        return len(self.entries)

    @property
    def unique_countries(self) -> int:
        return len({entry.country_code for entry in self.entries})


def build_history(
    country_statuses: Mapping[str, CountryStatus],
    visit_dates: Mapping[str, Sequence[VisitRecord]],
    catalog: CountryCatalog,
) -> HistoryTimeline:
    """Flatten visits of ``visited`` countries into a descending timeline.

    Only the arrival date drives ordering. Entries sharing an instant keep
    their insertion order (status-map order, then visit order).
    """
    entries = [
        HistoryEntry(
            country_code=code,
            country=catalog.get(code),
            visit=visit,
            sort_instant=sort_instant(visit.arrival_date),
        )
        for code, status in country_statuses.items()
        if status == CountryStatus.VISITED
        for visit in visit_dates.get(code, [])
    ]
    entries.sort(key=lambda entry: entry.sort_instant, reverse=True)
    return HistoryTimeline(entries=entries)
