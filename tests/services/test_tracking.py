"""Tests for TrackingService: statuses, visits, and the catalog listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.conftest import add_visit, set_status
from travelctl.services.tracking import TrackingService

if TYPE_CHECKING:
    from travelctl.infrastructure.store import TravelStore


class TestSetStatus:
    def test_set_status(self, store: TravelStore) -> None:
        result = TrackingService(store).set_status("fr", "visited")
        assert result.ok
        assert result.op == "set_status"
        assert result.data["code"] == "FR"
        assert result.data["name"] == "France"
        assert result.data["status"] == "visited"
        assert result.data["previous_status"] == "none"

    def test_previous_status_reported(self, store: TravelStore) -> None:
        set_status(store, "FR", "wishlist")
        result = TrackingService(store).set_status("FR", "visited")
        assert result.data["previous_status"] == "wishlist"

    def test_unknown_country(self, store: TravelStore) -> None:
        result = TrackingService(store).set_status("ZZ", "visited")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_COUNTRY"

    def test_invalid_status(self, store: TravelStore) -> None:
        result = TrackingService(store).set_status("FR", "been-there")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"

    def test_status_change_keeps_visits(self, store: TravelStore) -> None:
        set_status(store, "FR", "visited")
        add_visit(store, "FR", "2019")
        data = set_status(store, "FR", "none")
        assert data["visit_count"] == 1
        assert len(store.load_dataset().visit_dates["FR"]) == 1


class TestListStatuses:
    def test_sorted_by_region_then_name(self, store: TravelStore) -> None:
        set_status(store, "JP", "visited")
        set_status(store, "FR", "visited")
        set_status(store, "DE", "wishlist")
        result = TrackingService(store).list_statuses()
        assert result.ok
        assert [item["code"] for item in result.data["items"]] == ["JP", "FR", "DE"]

    def test_filter(self, store: TravelStore) -> None:
        set_status(store, "JP", "visited")
        set_status(store, "DE", "wishlist")
        result = TrackingService(store).list_statuses(status="wishlist")
        assert result.data["count"] == 1
        assert result.data["items"][0]["code"] == "DE"

    def test_invalid_filter(self, store: TravelStore) -> None:
        result = TrackingService(store).list_statuses(status="maybe")
        assert not result.ok


class TestAddVisit:
    def test_granularity_follows_arrival(self, store: TravelStore) -> None:
        set_status(store, "FR", "visited")
        data = add_visit(store, "FR", "2019-07", departure="2019-08", transportation="train")
        assert data["granularity"] == "month"
        assert data["label"] == "July 2019 - August 2019"
        assert data["transportation"] == "train"
        assert data["id"].isdigit()

    def test_explicit_id(self, store: TravelStore) -> None:
        set_status(store, "FR", "visited")
        data = add_visit(store, "FR", "2019", visit_id="trip-1")
        assert data["id"] == "trip-1"

    def test_duplicate_id_rejected(self, store: TravelStore) -> None:
        add_visit(store, "FR", "2019", visit_id="trip-1")
        result = TrackingService(store).add_visit("JP", "2020", visit_id="trip-1")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"

    def test_generated_ids_are_unique(self, store: TravelStore) -> None:
        first = add_visit(store, "FR", "2019")
        second = add_visit(store, "FR", "2020")
        assert first["id"] != second["id"]

    def test_mismatched_precision_rejected(self, store: TravelStore) -> None:
        result = TrackingService(store).add_visit("FR", "2019-07", departure="2019-07-20")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"

    def test_departure_before_arrival_rejected(self, store: TravelStore) -> None:
        result = TrackingService(store).add_visit("FR", "2019", departure="2018")
        assert not result.ok

    def test_invalid_date_rejected(self, store: TravelStore) -> None:
        result = TrackingService(store).add_visit("FR", "July 2019")
        assert not result.ok
        assert result.error is not None
        assert "Invalid date" in result.error.message

    def test_invalid_transportation(self, store: TravelStore) -> None:
        result = TrackingService(store).add_visit("FR", "2019", transportation="boat")
        assert not result.ok

    def test_unknown_country(self, store: TravelStore) -> None:
        result = TrackingService(store).add_visit("ZZ", "2019")
        assert result.error is not None
        assert result.error.code == "UNKNOWN_COUNTRY"

    def test_warns_when_country_not_visited(self, store: TravelStore) -> None:
        result = TrackingService(store).add_visit("FR", "2019")
        assert result.ok
        assert len(result.warnings) == 1
        assert "hidden from history" in result.warnings[0]

    def test_no_warning_when_visited(self, store: TravelStore) -> None:
        set_status(store, "FR", "visited")
        result = TrackingService(store).add_visit("FR", "2019")
        assert result.warnings == []


class TestDeleteVisit:
    def test_delete(self, store: TravelStore) -> None:
        data = add_visit(store, "FR", "2019")
        result = TrackingService(store).delete_visit("FR", data["id"])
        assert result.ok
        assert store.load_dataset().visit_dates["FR"] == []

    def test_delete_keeps_status(self, store: TravelStore) -> None:
        set_status(store, "FR", "visited")
        data = add_visit(store, "FR", "2019")
        TrackingService(store).delete_visit("FR", data["id"])
        assert store.load_dataset().country_statuses["FR"] == "visited"

    def test_not_found(self, store: TravelStore) -> None:
        result = TrackingService(store).delete_visit("FR", "nope")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"


class TestListVisits:
    def test_lists_in_recorded_order(self, store: TravelStore) -> None:
        add_visit(store, "FR", "2022", visit_id="b")
        add_visit(store, "FR", "2018", visit_id="a")
        result = TrackingService(store).list_visits("fr")
        assert result.data["count"] == 2
        assert [item["id"] for item in result.data["items"]] == ["b", "a"]
        assert result.data["status"] == "none"

    def test_empty(self, store: TravelStore) -> None:
        result = TrackingService(store).list_visits("JP")
        assert result.ok
        assert result.data["items"] == []


class TestListCountries:
    def test_all(self, store: TravelStore) -> None:
        result = TrackingService(store).list_countries()
        assert result.data["count"] == 197
        assert "Europe" in result.data["regions"]

    def test_region_filter_case_insensitive(self, store: TravelStore) -> None:
        result = TrackingService(store).list_countries(region="oceania")
        assert result.data["count"] > 0
        assert {item["region"] for item in result.data["items"]} == {"Oceania"}
