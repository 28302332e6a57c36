"""Visa records and urgency ranking.

A visa has two countdowns: days until its legal expiry and days of stay
left in its budget (``max_stay_days - total_days_used``). A visa is as
urgent as the tighter of the two. The stay budget can go negative on
overstay; negative values simply rank first.

For Schengen visas ``total_days_used`` is the combined count across all
Schengen countries, not a per-country figure.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from travelctl.domain.catalog import Country, CountryCatalog
from travelctl.domain.types import Urgency, VisaType

CRITICAL_DAYS = 7
WARNING_DAYS = 30


class VisaRecord(BaseModel):
    """A visa held for a country (or the Schengen area)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    country_code: str = Field(min_length=1)
    type: VisaType = VisaType.TOURIST
    is_schengen: bool = False
    issue_date: date
    expiry_date: date
    max_stay_days: int = Field(ge=0)
    total_days_used: int = Field(default=0, ge=0)
    multiple_entry: bool = False
    note: str | None = None

    @field_validator("note")
    @classmethod
    def _blank_note_is_absent(cls, value: str | None) -> str | None:
        return value or None

    @model_validator(mode="after")
    def _check_dates(self) -> Self:
        if self.expiry_date < self.issue_date:
            msg = f"expiry {self.expiry_date} is before issue {self.issue_date}"
            raise ValueError(msg)
        return self

    @property
    def remaining_days(self) -> int:
        return self.max_stay_days - self.total_days_used

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def urgency_level(
    days: int,
    *,
    critical_days: int = CRITICAL_DAYS,
    warning_days: int = WARNING_DAYS,
) -> Urgency:
    """Severity band for a day countdown."""
    if days <= critical_days:
        return Urgency.CRITICAL
    if days <= warning_days:
        return Urgency.WARNING
    return Urgency.NORMAL


@dataclass(frozen=True)
class VisaStatus:
    """An active visa with both countdowns computed."""

    visa: VisaRecord
    country: Country
    days_until_expiry: int
    remaining_days: int
    critical_days: int = CRITICAL_DAYS
    warning_days: int = WARNING_DAYS

    @property
    def urgency_score(self) -> int:
        return min(self.days_until_expiry, self.remaining_days)

    @property
    def urgency(self) -> Urgency:
        return self._level(self.urgency_score)

    @property
    def expiry_urgency(self) -> Urgency:
        return self._level(self.days_until_expiry)

    @property
    def stay_urgency(self) -> Urgency:
        return self._level(self.remaining_days)

    def _level(self, days: int) -> Urgency:
        return urgency_level(days, critical_days=self.critical_days, warning_days=self.warning_days)


@dataclass(frozen=True)
class VisaOverview:
    """Active visas by urgency plus the expired ones."""

    active: list[VisaStatus] = field(default_factory=list)
    expired: list[VisaRecord] = field(default_factory=list)


def rank_visas(
    visas: Sequence[VisaRecord],
    today: date,
    catalog: CountryCatalog,
    *,
    critical_days: int = CRITICAL_DAYS,
    warning_days: int = WARNING_DAYS,
) -> VisaOverview:
    """Split *visas* into active and expired and rank the active ones.

    A visa expiring on *today* is still active with zero days left.
    Active visas sort ascending by ``min(days_until_expiry, remaining_days)``;
    expired visas sort most recently expired first.
    """
    active = [
        VisaStatus(
            visa=visa,
            country=catalog.get(visa.country_code),
            days_until_expiry=(visa.expiry_date - today).days,
            remaining_days=visa.remaining_days,
            critical_days=critical_days,
            warning_days=warning_days,
        )
        for visa in visas
        if visa.expiry_date >= today
    ]
    active.sort(key=lambda status: status.urgency_score)
    expired = sorted(
        (visa for visa in visas if visa.expiry_date < today),
        key=lambda visa: visa.expiry_date,
        reverse=True,
    )
    return VisaOverview(active=active, expired=expired)
