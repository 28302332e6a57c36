"""Closed vocabularies used across the travel domain.

Every value here is also a wire value: statuses, granularities and
transportation modes appear verbatim in CSV rows and persisted JSON.
"""

from __future__ import annotations

from enum import StrEnum


class CountryStatus(StrEnum):
    """Per-country tracking status, independent of recorded visits."""

    NONE = "none"
    VISITED = "visited"
    WISHLIST = "wishlist"


class Granularity(StrEnum):
    """Precision level of a recorded travel date."""

    YEAR = "year"
    MONTH = "month"
    DAY = "day"


class Transportation(StrEnum):
    """How the traveller arrived."""

    PLANE = "plane"
    TRAIN = "train"
    CAR = "car"
    BUS = "bus"


class VisaType(StrEnum):
    """Visa categories."""

    TOURIST = "tourist"
    BUSINESS = "business"
    WORK = "work"
    STUDENT = "student"
    OTHER = "other"


class Urgency(StrEnum):
    """Severity band for a day countdown."""

    CRITICAL = "critical"
    WARNING = "warning"
    NORMAL = "normal"


STATUS_VALUES: frozenset[str] = frozenset(s.value for s in CountryStatus)
GRANULARITY_VALUES: frozenset[str] = frozenset(g.value for g in Granularity)
TRANSPORTATION_VALUES: frozenset[str] = frozenset(t.value for t in Transportation)
