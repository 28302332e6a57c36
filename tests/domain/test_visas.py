"""Tests for visa records and urgency ranking."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from travelctl.domain.catalog import load_catalog
from travelctl.domain.types import Urgency
from travelctl.domain.visas import VisaRecord, rank_visas, urgency_level

TODAY = date(2025, 1, 1)


def _visa(
    visa_id: str,
    expiry: date,
    *,
    max_stay: int = 90,
    used: int = 0,
    code: str = "FR",
) -> VisaRecord:
    return VisaRecord(
        id=visa_id,
        country_code=code,
        issue_date=date(2024, 1, 1),
        expiry_date=expiry,
        max_stay_days=max_stay,
        total_days_used=used,
    )


class TestVisaRecord:
    def test_remaining_days(self) -> None:
        assert _visa("a", TODAY, max_stay=90, used=30).remaining_days == 60

    def test_overstay_goes_negative(self) -> None:
        assert _visa("a", TODAY, max_stay=90, used=95).remaining_days == -5

    def test_expiry_before_issue_rejected(self) -> None:
        with pytest.raises(ValidationError, match="before issue"):
            _visa("a", date(2023, 12, 31))

    def test_negative_max_stay_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _visa("a", TODAY, max_stay=-1)


class TestUrgencyLevel:
    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (-3, Urgency.CRITICAL),
            (0, Urgency.CRITICAL),
            (7, Urgency.CRITICAL),
            (8, Urgency.WARNING),
            (30, Urgency.WARNING),
            (31, Urgency.NORMAL),
        ],
    )
    def test_default_thresholds(self, days: int, expected: Urgency) -> None:
        assert urgency_level(days) == expected

    def test_custom_thresholds(self) -> None:
        assert urgency_level(10, critical_days=14, warning_days=60) == Urgency.CRITICAL
        assert urgency_level(45, critical_days=14, warning_days=60) == Urgency.WARNING


class TestRankVisas:
    def test_tighter_countdown_ranks_first(self) -> None:
        # min(5, 60) = 5 ranks before min(50, 10) = 10
        soon_expiring = _visa("a", date(2025, 1, 6), max_stay=60)
        short_stay = _visa("b", date(2025, 2, 20), max_stay=10)
        overview = rank_visas([short_stay, soon_expiring], TODAY, load_catalog())
        assert [s.visa.id for s in overview.active] == ["a", "b"]
        assert overview.active[0].urgency_score == 5
        assert overview.active[1].days_until_expiry == 50
        assert overview.active[1].urgency_score == 10

    def test_expiring_today_is_active(self) -> None:
        overview = rank_visas([_visa("a", TODAY)], TODAY, load_catalog())
        status = overview.active[0]
        assert status.days_until_expiry == 0
        assert status.urgency == Urgency.CRITICAL
        assert overview.expired == []

    def test_expired_most_recent_first(self) -> None:
        older = _visa("old", date(2024, 6, 1))
        newer = _visa("new", date(2024, 12, 31))
        overview = rank_visas([older, newer], TODAY, load_catalog())
        assert overview.active == []
        assert [v.id for v in overview.expired] == ["new", "old"]

    def test_overstay_ranks_first(self) -> None:
        overstayed = _visa("over", date(2026, 1, 1), max_stay=90, used=95)
        near = _visa("near", date(2025, 1, 2))
        overview = rank_visas([near, overstayed], TODAY, load_catalog())
        assert [s.visa.id for s in overview.active] == ["over", "near"]
        assert overview.active[0].stay_urgency == Urgency.CRITICAL
        assert overview.active[0].expiry_urgency == Urgency.NORMAL

    def test_custom_thresholds(self) -> None:
        visa = _visa("a", date(2025, 1, 11), max_stay=365)
        overview = rank_visas(
            [visa], TODAY, load_catalog(), critical_days=14, warning_days=60
        )
        assert overview.active[0].urgency == Urgency.CRITICAL

    def test_country_metadata(self) -> None:
        overview = rank_visas([_visa("a", TODAY, code="JP")], TODAY, load_catalog())
        assert overview.active[0].country.name == "Japan"
