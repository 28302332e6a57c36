"""TransferService — CSV export and import of statuses and visits.

Export renders the stored dataset with :func:`to_csv`. Import decodes
with :func:`parse_csv`; a structural failure imports nothing, while
skipped rows surface as warnings on an otherwise successful result.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

import structlog

from travelctl.domain.csv_format import export_filename, parse_csv, to_csv
from travelctl.domain.visits import merge_datasets
from travelctl.services.base import BaseService
from travelctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class TransferService(BaseService):
    """Move travel data in and out as CSV text."""

    def export_csv(self, *, today: date | None = None) -> ServiceResult:
        """Render the stored statuses and visits as CSV text.

        Returns the content in ``data["content"]`` along with the
        conventional file name for the export date.
        """
        dataset = self._store.load_dataset()
        content = to_csv(dataset)
        filename = export_filename(
            today or date.today(), prefix=self._settings.export.filename_prefix
        )
        unexported = sorted(set(dataset.visit_dates) - set(dataset.country_statuses))
        warnings = [
            f"{code} has visits but no status; its visits are not exported"
            for code in unexported
            if dataset.visit_dates[code]
        ]
        return ServiceResult(
            ok=True,
            op="export_csv",
            data={
                "filename": filename,
                "content": content,
                "country_count": len(dataset.country_statuses),
                "visit_count": sum(
                    len(dataset.visit_dates.get(code, [])) for code in dataset.country_statuses
                ),
            },
            warnings=warnings,
        )

    def write_export(self, output: Path, *, today: date | None = None) -> ServiceResult:
        """Write the CSV export to *output*.

        When *output* is an existing directory the conventional
        ``travel-history-<date>.csv`` name is used inside it.
        """
        result = self.export_csv(today=today)
        target = output / result.data["filename"] if output.is_dir() else output
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result.data["content"], encoding="utf-8")
        except OSError as exc:
            return ServiceResult.failure(
                "export_csv", "IO_ERROR", f"Cannot write {target}: {exc}", path=str(target)
            )

        data: dict[str, Any] = {k: v for k, v in result.data.items() if k != "content"}
        data["output_file"] = str(target)
        log.debug("export.written", path=str(target), countries=data["country_count"])
        return ServiceResult(ok=True, op="export_csv", data=data, warnings=result.warnings)

    def import_csv(self, text: str, *, replace: bool = False) -> ServiceResult:
        """Decode *text* and merge it into (or replace) the stored data.

        Merging overwrites statuses per country and appends visits whose
        IDs the country does not already have.
        """
        op = "import_csv"
        parsed = parse_csv(text)
        warnings = [str(diagnostic) for diagnostic in parsed.diagnostics]
        if parsed.dataset is None:
            return ServiceResult.failure(
                op,
                "INVALID_CSV",
                "CSV file is empty or invalid; nothing was imported",
                diagnostics=warnings,
            )

        incoming = parsed.dataset
        with self._store.transaction() as txn:
            merged = incoming if replace else merge_datasets(txn.dataset(), incoming)
            txn.save_dataset(merged)

        skipped_rows = sum(1 for d in parsed.diagnostics if d.row_skipped)
        log.info(
            "import.completed",
            countries=len(incoming.country_statuses),
            visits=incoming.visit_count,
            skipped_rows=skipped_rows,
            replace=replace,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "mode": "replace" if replace else "merge",
                "country_count": len(incoming.country_statuses),
                "visit_count": incoming.visit_count,
                "skipped_rows": skipped_rows,
                "total_countries": len(merged.country_statuses),
                "total_visits": merged.visit_count,
            },
            warnings=warnings,
        )

    def import_file(self, path: Path, *, replace: bool = False) -> ServiceResult:
        """Read *path* as UTF-8 and import it."""
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            return ServiceResult.failure(
                "import_csv", "IO_ERROR", f"Cannot read {path}: {exc}", path=str(path)
            )
        return self.import_csv(text, replace=replace)
