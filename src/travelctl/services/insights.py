"""InsightsService — history timeline and travel statistics.

Both operations are read-only views computed from the stored statuses
and visits joined with the country catalog.
"""

from __future__ import annotations

from travelctl.domain.history import build_history
from travelctl.domain.stats import compute_stats, countries_with_status
from travelctl.services.base import BaseService
from travelctl.services.result import ServiceResult
from travelctl.services.tracking import country_payload, visit_payload


class InsightsService(BaseService):
    """Derived views over the travel record."""

    def history(self) -> ServiceResult:
        """Visits of visited countries, most recent arrival first."""
        dataset = self._store.load_dataset()
        timeline = build_history(dataset.country_statuses, dataset.visit_dates, self._catalog)
        items = [
            {
                "id": entry.entry_id,
                **country_payload(entry.country),
                "visit": visit_payload(entry.country_code, entry.visit),
                "sort_date": entry.sort_instant.isoformat(),
            }
            for entry in timeline.entries
        ]
        return ServiceResult(
            ok=True,
            op="history",
            data={
                "total_visits": timeline.total_visits,
                "unique_countries": timeline.unique_countries,
                "items": items,
            },
        )

    def stats(self, *, top: int | None = None) -> ServiceResult:
        """Counts, per-region breakdown, transport usage and top countries."""
        limit = top if top is not None else self._settings.stats.most_visited_limit
        if limit < 1:
            return ServiceResult.failure(
                "stats", "INVALID_INPUT", f"--top must be at least 1, got {limit}"
            )
        dataset = self._store.load_dataset()
        countries = countries_with_status(
            self._catalog, dataset.country_statuses, dataset.visit_dates
        )
        stats = compute_stats(countries, most_visited_limit=limit)
        return ServiceResult(ok=True, op="stats", data=stats.to_dict())
