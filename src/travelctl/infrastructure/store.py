"""TravelStore — key-value persistence for statuses, visits, and visas.

The store is the single dependency injected into every service. State is
kept under three logical keys, each a JSON document:

- ``country_statuses``: ``{"US": "visited", ...}``
- ``visit_dates``: ``{"US": [{...visit...}, ...], ...}``
- ``visas``: ``[{...visa...}, ...]``

Reads are forgiving: an unreadable document loads as empty and an
invalid entry is dropped, each with a logged warning. Writes go through
:meth:`TravelStore.transaction` so multi-key updates commit together.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError
from sqlalchemy import delete, insert, select

from travelctl.domain.types import STATUS_VALUES, CountryStatus
from travelctl.domain.visas import VisaRecord
from travelctl.domain.visits import ExportDataset, StatusMap, VisitMap, VisitRecord
from travelctl.infrastructure.database.engine import init_database
from travelctl.infrastructure.database.schema import (
    STATUSES_KEY,
    VISAS_KEY,
    VISIT_DATES_KEY,
    kv_store,
)

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from travelctl.config.settings import TravelSettings

log = structlog.get_logger(__name__)


def _utc_now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds")


# ---------------------------------------------------------------------------
# JSON document codecs
# ---------------------------------------------------------------------------


def encode_statuses(statuses: Mapping[str, CountryStatus]) -> str:
    return json.dumps({code: status.value for code, status in statuses.items()})


def decode_statuses(raw: Any) -> StatusMap:
    statuses: StatusMap = {}
    if not isinstance(raw, dict):
        log.warning("store.invalid_document", key=STATUSES_KEY)
        return statuses
    for code, value in raw.items():
        if value in STATUS_VALUES:
            statuses[str(code)] = CountryStatus(value)
        else:
            log.warning("store.invalid_status", country=code, value=value)
    return statuses


def encode_visit_dates(visit_dates: Mapping[str, Sequence[VisitRecord]]) -> str:
    return json.dumps(
        {code: [visit.to_dict() for visit in visits] for code, visits in visit_dates.items()}
    )


def decode_visit_dates(raw: Any) -> VisitMap:
    visit_dates: VisitMap = {}
    if not isinstance(raw, dict):
        log.warning("store.invalid_document", key=VISIT_DATES_KEY)
        return visit_dates
    for code, entries in raw.items():
        if not isinstance(entries, list):
            log.warning("store.invalid_visits", country=code)
            continue
        records: list[VisitRecord] = []
        for entry in entries:
            try:
                records.append(VisitRecord.model_validate(entry))
            except ValidationError as exc:
                log.warning("store.invalid_visit", country=code, error=str(exc))
        visit_dates[str(code)] = records
    return visit_dates


def encode_visas(visas: Sequence[VisaRecord]) -> str:
    return json.dumps([visa.to_dict() for visa in visas])


def decode_visas(raw: Any) -> list[VisaRecord]:
    if not isinstance(raw, list):
        log.warning("store.invalid_document", key=VISAS_KEY)
        return []
    visas: list[VisaRecord] = []
    for entry in raw:
        try:
            visas.append(VisaRecord.model_validate(entry))
        except ValidationError as exc:
            log.warning("store.invalid_visa", error=str(exc))
    return visas


# ---------------------------------------------------------------------------
# StoreTransaction, yielded by TravelStore.transaction()
# ---------------------------------------------------------------------------


@dataclass
class StoreTransaction:
    """Active transaction with typed accessors over the key-value table."""

    conn: Connection

    def get_json(self, key: str) -> Any | None:
        """Return the decoded document under *key*, or None if absent/unreadable."""
        row = self.conn.execute(select(kv_store.c.value).where(kv_store.c.key == key)).first()
        if row is None:
            return None
        try:
            return json.loads(row.value)
        except json.JSONDecodeError as exc:
            log.warning("store.unreadable_json", key=key, error=str(exc))
            return None

    def put(self, key: str, value: str) -> None:
        """Replace the document under *key* (DELETE + INSERT pattern)."""
        self.conn.execute(delete(kv_store).where(kv_store.c.key == key))
        self.conn.execute(insert(kv_store).values(key=key, value=value, modified=_utc_now()))

    def statuses(self) -> StatusMap:
        raw = self.get_json(STATUSES_KEY)
        return {} if raw is None else decode_statuses(raw)

    def visit_dates(self) -> VisitMap:
        raw = self.get_json(VISIT_DATES_KEY)
        return {} if raw is None else decode_visit_dates(raw)

    def visas(self) -> list[VisaRecord]:
        raw = self.get_json(VISAS_KEY)
        return [] if raw is None else decode_visas(raw)

    def dataset(self) -> ExportDataset:
        return ExportDataset(country_statuses=self.statuses(), visit_dates=self.visit_dates())

    def save_statuses(self, statuses: Mapping[str, CountryStatus]) -> None:
        self.put(STATUSES_KEY, encode_statuses(statuses))

    def save_visit_dates(self, visit_dates: Mapping[str, Sequence[VisitRecord]]) -> None:
        self.put(VISIT_DATES_KEY, encode_visit_dates(visit_dates))

    def save_visas(self, visas: Sequence[VisaRecord]) -> None:
        self.put(VISAS_KEY, encode_visas(visas))

    def save_dataset(self, dataset: ExportDataset) -> None:
        self.save_statuses(dataset.country_statuses)
        self.save_visit_dates(dataset.visit_dates)


# ---------------------------------------------------------------------------
# TravelStore
# ---------------------------------------------------------------------------


class TravelStore:
    """Owns the database engine and hands out transactions.

    The database is created lazily on first access so that ``--help``
    and read-only failures never touch the filesystem.
    """

    def __init__(self, settings: TravelSettings) -> None:
        self._settings = settings
        self._engine: Engine | None = None

    @property
    def settings(self) -> TravelSettings:
        return self._settings

    @property
    def db_path(self) -> Path:
        return self._settings.db_path

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = init_database(self.db_path)
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Open a transaction; commits on success, rolls back on error."""
        with self.engine.begin() as conn:
            yield StoreTransaction(conn=conn)

    def load_dataset(self) -> ExportDataset:
        with self.transaction() as txn:
            return txn.dataset()

    def load_visas(self) -> list[VisaRecord]:
        with self.transaction() as txn:
            return txn.visas()

    def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
