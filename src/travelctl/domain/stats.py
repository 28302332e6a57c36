"""Travel statistics over the catalog joined with statuses and visits.

All percentages are rounded to one decimal place. Rankings use stable
sorts, so ties keep the order of the input list.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from travelctl.domain.catalog import Country, CountryCatalog, placeholder_country
from travelctl.domain.types import CountryStatus, Transportation
from travelctl.domain.visits import VisitRecord

DEFAULT_MOST_VISITED_LIMIT = 5


@dataclass(frozen=True)
class CountryWithStatus:
    """A catalog country joined with its status and visits."""

    country: Country
    status: CountryStatus
    visits: tuple[VisitRecord, ...] = ()

    @property
    def code(self) -> str:
        return self.country.code

    @property
    def visit_count(self) -> int:
        return len(self.visits)


@dataclass(frozen=True)
class RegionStats:
    region: str
    visited: int
    wishlist: int
    total: int

    @property
    def percentage(self) -> float:
        return percentage(self.visited, self.total)

    def to_dict(self) -> dict[str, Any]:
        return {
            "region": self.region,
            "visited": self.visited,
            "wishlist": self.wishlist,
            "total": self.total,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class TravelStats:
    """Aggregated statistics for a list of countries."""

    total_countries: int
    visited_count: int
    wishlist_count: int
    total_visits: int
    regions: list[RegionStats] = field(default_factory=list)
    transportation: dict[Transportation, int] = field(default_factory=dict)
    most_visited: list[CountryWithStatus] = field(default_factory=list)

    @property
    def not_visited_count(self) -> int:
        return self.total_countries - self.visited_count

    @property
    def visited_percentage(self) -> float:
        return percentage(self.visited_count, self.total_countries)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_countries": self.total_countries,
            "visited": self.visited_count,
            "wishlist": self.wishlist_count,
            "not_visited": self.not_visited_count,
            "visited_percentage": self.visited_percentage,
            "total_visits": self.total_visits,
            "regions": [region.to_dict() for region in self.regions],
            "transportation": {mode.value: count for mode, count in self.transportation.items()},
            "most_visited": [
                {
                    "code": entry.code,
                    "name": entry.country.name,
                    "flag": entry.country.flag,
                    "visits": entry.visit_count,
                }
                for entry in self.most_visited
            ],
        }


def percentage(part: int, whole: int) -> float:
    """``part / whole * 100`` rounded to one decimal; 0.0 when *whole* is 0."""
    if whole == 0:
        return 0.0
    return round(part / whole * 100, 1)


def countries_with_status(
    catalog: CountryCatalog,
    country_statuses: Mapping[str, CountryStatus],
    visit_dates: Mapping[str, Sequence[VisitRecord]],
) -> list[CountryWithStatus]:
    """Join the catalog with statuses and visits.

    Codes present in the data but missing from the catalog are appended
    with placeholder metadata.
    """
    joined = [
        CountryWithStatus(
            country=country,
            status=country_statuses.get(country.code, CountryStatus.NONE),
            visits=tuple(visit_dates.get(country.code, ())),
        )
        for country in catalog
    ]
    extra: dict[str, None] = {}
    for code in (*country_statuses, *visit_dates):
        if code not in catalog:
            extra.setdefault(code, None)
    for code in extra:
        joined.append(
            CountryWithStatus(
                country=placeholder_country(code),
                status=country_statuses.get(code, CountryStatus.NONE),
                visits=tuple(visit_dates.get(code, ())),
            )
        )
    return joined


def compute_stats(
    countries: Sequence[CountryWithStatus],
    *,
    most_visited_limit: int = DEFAULT_MOST_VISITED_LIMIT,
) -> TravelStats:
    """Aggregate counts, region breakdown, transport usage and rankings."""
    visited = [c for c in countries if c.status == CountryStatus.VISITED]
    wishlist_count = sum(1 for c in countries if c.status == CountryStatus.WISHLIST)

    region_counts: dict[str, dict[str, int]] = {}
    for entry in countries:
        counts = region_counts.setdefault(
            entry.country.region, {"visited": 0, "wishlist": 0, "total": 0}
        )
        counts["total"] += 1
        if entry.status == CountryStatus.VISITED:
            counts["visited"] += 1
        elif entry.status == CountryStatus.WISHLIST:
            counts["wishlist"] += 1
    regions = sorted(
        (RegionStats(region=name, **counts) for name, counts in region_counts.items()),
        key=lambda region: region.visited,
        reverse=True,
    )

    transportation = dict.fromkeys(Transportation, 0)
    for entry in visited:
        for visit in entry.visits:
            if visit.transportation is not None:
                transportation[visit.transportation] += 1

    most_visited = sorted(visited, key=lambda entry: entry.visit_count, reverse=True)

    return TravelStats(
        total_countries=len(countries),
        visited_count=len(visited),
        wishlist_count=wishlist_count,
        total_visits=sum(entry.visit_count for entry in visited),
        regions=regions,
        transportation=transportation,
        most_visited=most_visited[:most_visited_limit],
    )
