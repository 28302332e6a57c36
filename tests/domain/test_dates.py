"""Tests for partial dates and their display formatting."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from travelctl.domain.dates import (
    PartialDate,
    format_date,
    format_visit_range,
    sort_instant,
)
from travelctl.domain.types import Granularity


class TestPartialDate:
    def test_granularity_follows_populated_fields(self) -> None:
        assert PartialDate(year=2020).granularity == Granularity.YEAR
        assert PartialDate(year=2020, month=3).granularity == Granularity.MONTH
        assert PartialDate(year=2020, month=3, day=5).granularity == Granularity.DAY

    def test_day_requires_month(self) -> None:
        with pytest.raises(ValidationError, match="day requires month"):
            PartialDate(year=2020, day=5)

    def test_impossible_day_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PartialDate(year=2023, month=2, day=29)

    def test_leap_day_accepted(self) -> None:
        assert PartialDate(year=2024, month=2, day=29).day == 29

    def test_month_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            PartialDate(year=2020, month=13)

    def test_frozen(self) -> None:
        value = PartialDate(year=2020)
        with pytest.raises(ValidationError):
            value.year = 2021  # type: ignore[misc]

    def test_isoformat(self) -> None:
        assert PartialDate(year=2019).isoformat() == "2019"
        assert PartialDate(year=2019, month=7).isoformat() == "2019-07"
        assert PartialDate(year=2019, month=7, day=5).isoformat() == "2019-07-05"

    def test_to_dict_omits_missing_fields(self) -> None:
        assert PartialDate(year=2019, month=7).to_dict() == {"year": 2019, "month": 7}

    def test_truncated(self) -> None:
        value = PartialDate(year=2019, month=7, day=5)
        assert value.truncated(Granularity.YEAR) == (2019,)
        assert value.truncated(Granularity.MONTH) == (2019, 7)
        assert value.truncated(Granularity.DAY) == (2019, 7, 5)


class TestParse:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2019", PartialDate(year=2019)),
            ("2019-07", PartialDate(year=2019, month=7)),
            ("2019-7-5", PartialDate(year=2019, month=7, day=5)),
            (" 2019-07-05 ", PartialDate(year=2019, month=7, day=5)),
        ],
    )
    def test_valid_shapes(self, text: str, expected: PartialDate) -> None:
        assert PartialDate.parse(text) == expected

    @pytest.mark.parametrize("text", ["", "July 2019", "2019/07", "2019-07-05T10:00"])
    def test_invalid_shapes(self, text: str) -> None:
        with pytest.raises(ValueError, match="Invalid date"):
            PartialDate.parse(text)

    def test_impossible_date(self) -> None:
        with pytest.raises(ValueError):
            PartialDate.parse("2019-02-30")


class TestFormatDate:
    def test_year(self) -> None:
        assert format_date(PartialDate(year=2020), Granularity.YEAR) == "2020"

    def test_month(self) -> None:
        assert format_date(PartialDate(year=2020, month=3), Granularity.MONTH) == "March 2020"

    def test_day(self) -> None:
        value = PartialDate(year=2020, month=3, day=5)
        assert format_date(value, Granularity.DAY) == "March 5, 2020"

    def test_missing_fields_fall_back_to_year(self) -> None:
        assert format_date(PartialDate(year=2020), Granularity.MONTH) == "2020"
        assert format_date(PartialDate(year=2020, month=3), Granularity.DAY) == "2020"

    def test_coarser_granularity_ignores_extra_fields(self) -> None:
        value = PartialDate(year=2020, month=3, day=5)
        assert format_date(value, Granularity.YEAR) == "2020"


class TestFormatVisitRange:
    def test_arrival_only(self) -> None:
        assert format_visit_range(PartialDate(year=2018), None, Granularity.YEAR) == "2018"

    def test_identical_ends_collapse(self) -> None:
        arrival = PartialDate(year=2018, month=7)
        departure = PartialDate(year=2018, month=7)
        assert format_visit_range(arrival, departure, Granularity.MONTH) == "July 2018"

    def test_distinct_ends(self) -> None:
        arrival = PartialDate(year=2020, month=3, day=5)
        departure = PartialDate(year=2020, month=3, day=9)
        assert (
            format_visit_range(arrival, departure, Granularity.DAY)
            == "March 5, 2020 - March 9, 2020"
        )


class TestSortInstant:
    def test_missing_fields_default_to_first(self) -> None:
        assert sort_instant(PartialDate(year=2019)) == date(2019, 1, 1)
        assert sort_instant(PartialDate(year=2019, month=7)) == date(2019, 7, 1)
        assert sort_instant(PartialDate(year=2019, month=7, day=5)) == date(2019, 7, 5)
