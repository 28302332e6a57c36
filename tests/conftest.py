"""Shared pytest fixtures and test helpers for travelctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from travelctl.config.settings import TravelSettings
from travelctl.domain.dates import PartialDate
from travelctl.domain.types import Granularity, Transportation
from travelctl.domain.visits import VisitRecord
from travelctl.infrastructure.store import TravelStore


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Temporary data directory holding the ``.travelctl`` database.

    All store-related fixtures (settings, store, _isolated_data) build on this.
    """
    return tmp_path


@pytest.fixture
def settings(data_root: Path) -> TravelSettings:
    return TravelSettings.from_cli(data_root=data_root)


@pytest.fixture
def store(settings: TravelSettings) -> Iterator[TravelStore]:
    """Store on a temp directory; the database is created on first use."""
    s = TravelStore(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_data(data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp data root so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_data")`` on command test
    classes. Tests that need the path can also request ``tmp_path`` directly
    (pytest deduplicates: it's the same directory).
    """
    monkeypatch.delenv("TRAVELCTL_CONFIG", raising=False)
    monkeypatch.chdir(data_root)


# ---------------------------------------------------------------------------
# Shared test helpers (used across domain and service test modules)
# ---------------------------------------------------------------------------


def make_visit(
    visit_id: str,
    arrival: str,
    departure: str | None = None,
    *,
    transportation: Transportation | None = None,
    note: str | None = None,
) -> VisitRecord:
    """Build a VisitRecord whose granularity follows *arrival*'s precision."""
    arrival_date = PartialDate.parse(arrival)
    return VisitRecord(
        id=visit_id,
        arrival_date=arrival_date,
        departure_date=PartialDate.parse(departure) if departure else None,
        granularity=arrival_date.granularity,
        transportation=transportation,
        note=note,
    )


def year_visit(visit_id: str, year: int) -> VisitRecord:
    return VisitRecord(
        id=visit_id, arrival_date=PartialDate(year=year), granularity=Granularity.YEAR
    )


def set_status(store: TravelStore, code: str, status: str) -> dict[str, Any]:
    """Set a status via TrackingService, asserting success."""
    from travelctl.services.tracking import TrackingService

    result = TrackingService(store).set_status(code, status)
    assert result.ok, result.error
    return result.data


def add_visit(store: TravelStore, code: str, arrival: str, **kwargs: Any) -> dict[str, Any]:
    """Record a visit via TrackingService, asserting success."""
    from travelctl.services.tracking import TrackingService

    result = TrackingService(store).add_visit(code, arrival, **kwargs)
    assert result.ok, result.error
    return result.data
