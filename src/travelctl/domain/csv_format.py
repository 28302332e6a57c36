"""CSV interchange format for statuses and visit records.

One header row, then one row per visit, or one bare row for a country
that has a status but no visits. Column order is fixed::

    Country Code,Status,Visit ID,Arrival Year,Arrival Month,Arrival Day,
    Departure Year,Departure Month,Departure Day,Granularity,Transportation,Note

Encoding always quotes a present note (doubling internal quotes). The
country code and visit ID are quoted only when they contain a comma, a
quote or a line break; every other field is written bare.

Decoding is a tolerant fold over the data rows: malformed rows are
skipped with a :class:`CsvDiagnostic` and the rest of the file is still
read. Only structural failure (fewer than two lines, or a reader error)
yields no dataset at all.

INVARIANT: ``from_csv(to_csv(d)) == d`` for any dataset holding valid
statuses and valid visit records. An empty visit list encodes exactly
like a missing one, so ``{"FR": []}`` decodes as no entry for FR.
"""

from __future__ import annotations

import csv
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

import structlog
from pydantic import ValidationError

from travelctl.domain.dates import PartialDate
from travelctl.domain.types import (
    GRANULARITY_VALUES,
    STATUS_VALUES,
    TRANSPORTATION_VALUES,
    CountryStatus,
    Granularity,
    Transportation,
)
from travelctl.domain.visits import ExportDataset, StatusMap, VisitMap, VisitRecord

log = structlog.get_logger(__name__)

CSV_COLUMNS: tuple[str, ...] = (
    "Country Code",
    "Status",
    "Visit ID",
    "Arrival Year",
    "Arrival Month",
    "Arrival Day",
    "Departure Year",
    "Departure Month",
    "Departure Day",
    "Granularity",
    "Transportation",
    "Note",
)
CSV_HEADER = ",".join(CSV_COLUMNS)
COLUMN_COUNT = len(CSV_COLUMNS)
EXPORT_FILENAME_PREFIX = "travel-history"


@dataclass(frozen=True)
class CsvDiagnostic:
    """One problem found while decoding.

    Attributes:
        line: 1-based line number in the input (the header is line 1).
        reason: Human-readable description.
        row_skipped: False when only a field was dropped and the row kept.
    """

    line: int
    reason: str
    row_skipped: bool = True

    def __str__(self) -> str:
        return f"Line {self.line}: {self.reason}"


@dataclass(frozen=True)
class CsvParseResult:
    """Outcome of :func:`parse_csv`.

    ``dataset`` is None only on structural failure.
    """

    dataset: ExportDataset | None
    diagnostics: list[CsvDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.dataset is not None


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _cell(value: int | None) -> str:
    return "" if value is None else str(value)


_SPECIAL_CHARS = frozenset(',"\r\n')


def _quoted(value: str) -> str:
    escaped = value.replace('"', '""')
    return f'"{escaped}"'


def _text_cell(value: str) -> str:
    """Write *value* bare unless it holds a delimiter, quote or line break."""
    return _quoted(value) if _SPECIAL_CHARS.intersection(value) else value


def _quote_note(note: str | None) -> str:
    return _quoted(note) if note else ""


def _visit_row(country_code: str, status: CountryStatus, visit: VisitRecord) -> str:
    arrival = visit.arrival_date
    departure = visit.departure_date
    cells = [
        _text_cell(country_code),
        status.value,
        _text_cell(visit.id),
        str(arrival.year),
        _cell(arrival.month),
        _cell(arrival.day),
        _cell(departure.year if departure else None),
        _cell(departure.month if departure else None),
        _cell(departure.day if departure else None),
        visit.granularity.value,
        visit.transportation.value if visit.transportation else "",
        _quote_note(visit.note),
    ]
    return ",".join(cells)


def to_csv(dataset: ExportDataset) -> str:
    """Encode *dataset* as CSV text (no trailing newline).

    Countries are emitted in status-mapping order. Visits recorded for a
    country without a status are not exported. A country whose visit list
    is empty gets the same bare row as one with no list at all.
    """
    rows = [CSV_HEADER]
    for country_code, status in dataset.country_statuses.items():
        visits = dataset.visit_dates.get(country_code, [])
        if not visits:
            blanks = [""] * (COLUMN_COUNT - 2)
            rows.append(",".join([_text_cell(country_code), status.value, *blanks]))
            continue
        for visit in visits:
            rows.append(_visit_row(country_code, status, visit))
    return "\n".join(rows)


def export_filename(today: date, *, prefix: str = EXPORT_FILENAME_PREFIX) -> str:
    """File name for an export made on *today*."""
    return f"{prefix}-{today.isoformat()}.csv"


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _optional_int(value: str) -> int | None:
    return int(value) if value else None


def _partial_date(year: str, month: str, day: str) -> PartialDate:
    return PartialDate(year=int(year), month=_optional_int(month), day=_optional_int(day))


class _RowFold:
    """Accumulator threaded through the data rows."""

    def __init__(self) -> None:
        self.statuses: StatusMap = {}
        self.visits: VisitMap = {}
        self.diagnostics: list[CsvDiagnostic] = []

    def skip(self, line: int, reason: str) -> None:
        self.note(line, reason, row_skipped=True)

    def note(self, line: int, reason: str, *, row_skipped: bool = False) -> None:
        diagnostic = CsvDiagnostic(line=line, reason=reason, row_skipped=row_skipped)
        self.diagnostics.append(diagnostic)
        log.info(
            "csv.row_skipped" if row_skipped else "csv.field_dropped",
            line=line,
            reason=reason,
        )

    def add_row(self, line: int, fields: Sequence[str]) -> None:
        if len(fields) < COLUMN_COUNT:
            self.skip(line, f"has insufficient columns ({len(fields)} of {COLUMN_COUNT})")
            return

        (
            country_code,
            status,
            visit_id,
            arrival_year,
            arrival_month,
            arrival_day,
            departure_year,
            departure_month,
            departure_day,
            granularity,
            transportation,
        ) = (value.strip() for value in fields[: COLUMN_COUNT - 1])
        note = fields[COLUMN_COUNT - 1]

        if not country_code or not status:
            self.skip(line, "missing country code or status")
            return
        if status not in STATUS_VALUES:
            self.skip(line, f"invalid status: {status}")
            return

        self.statuses[country_code] = CountryStatus(status)

        if not visit_id or not arrival_year:
            return

        granularity = granularity or Granularity.YEAR.value
        if granularity not in GRANULARITY_VALUES:
            self.skip(line, f"invalid granularity: {granularity}")
            return

        transport: Transportation | None = None
        if transportation:
            if transportation in TRANSPORTATION_VALUES:
                transport = Transportation(transportation)
            else:
                self.note(line, f"unrecognized transportation dropped: {transportation}")

        try:
            visit = VisitRecord(
                id=visit_id,
                arrival_date=_partial_date(arrival_year, arrival_month, arrival_day),
                departure_date=(
                    _partial_date(departure_year, departure_month, departure_day)
                    if departure_year
                    else None
                ),
                granularity=Granularity(granularity),
                transportation=transport,
                note=note or None,
            )
        except ValueError as exc:
            self.skip(line, f"invalid visit {visit_id}: {_first_error(exc)}")
            return

        self.visits.setdefault(country_code, []).append(visit)

    def result(self) -> CsvParseResult:
        dataset = ExportDataset(country_statuses=self.statuses, visit_dates=self.visits)
        return CsvParseResult(dataset=dataset, diagnostics=self.diagnostics)


def _first_error(exc: ValueError) -> str:
    if isinstance(exc, ValidationError):
        errors = exc.errors()
        if errors:
            return str(errors[0]["msg"])
    return str(exc)


def parse_csv(text: str) -> CsvParseResult:
    """Decode CSV *text*, collecting diagnostics for skipped rows.

    The header line is discarded without validation.
    """
    lines = text.strip().splitlines(keepends=True)
    if len(lines) < 2:
        diagnostic = CsvDiagnostic(line=len(lines), reason="CSV file is empty or invalid")
        log.info("csv.unreadable", line=diagnostic.line, reason=diagnostic.reason)
        return CsvParseResult(dataset=None, diagnostics=[diagnostic])

    fold = _RowFold()
    reader = csv.reader(lines[1:])
    try:
        for fields in reader:
            line = reader.line_num + 1
            if not any(value.strip() for value in fields):
                continue
            fold.add_row(line, fields)
    except csv.Error as exc:
        diagnostic = CsvDiagnostic(line=reader.line_num + 1, reason=f"unreadable CSV: {exc}")
        log.info("csv.unreadable", line=diagnostic.line, reason=diagnostic.reason)
        return CsvParseResult(dataset=None, diagnostics=[*fold.diagnostics, diagnostic])

    return fold.result()


def from_csv(text: str) -> ExportDataset | None:
    """Decode CSV *text*; None on structural failure."""
    return parse_csv(text).dataset
