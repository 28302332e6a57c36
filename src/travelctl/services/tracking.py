"""TrackingService — country statuses and visit records.

Statuses and visits are stored and changed independently: setting a
status never adds or removes visits, and deleting the last visit never
changes a status.
"""

from __future__ import annotations

from typing import Any

import structlog

from travelctl.domain.catalog import Country
from travelctl.domain.dates import PartialDate
from travelctl.domain.ids import generate_visit_id
from travelctl.domain.types import STATUS_VALUES, TRANSPORTATION_VALUES, CountryStatus
from travelctl.domain.visits import (
    VisitRecord,
    add_visit,
    delete_visit,
    format_visit,
    set_status,
)
from travelctl.services.base import BaseService
from travelctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


def visit_payload(country_code: str, visit: VisitRecord) -> dict[str, Any]:
    """Serialize a visit for a ServiceResult payload."""
    return {
        "country": country_code,
        **visit.to_dict(),
        "label": format_visit(visit),
    }


def country_payload(country: Country) -> dict[str, Any]:
    return {
        "code": country.code,
        "name": country.name,
        "flag": country.flag,
        "region": country.region,
    }


class TrackingService(BaseService):
    """Mark countries and record visits."""

    def set_status(self, country_code: str, status: str) -> ServiceResult:
        op = "set_status"
        code = self._normalize_code(country_code)
        if code not in self._catalog:
            return ServiceResult.failure(
                op, "UNKNOWN_COUNTRY", f"Unknown country code: {code}", code=code
            )
        if status not in STATUS_VALUES:
            return ServiceResult.failure(
                op,
                "INVALID_INPUT",
                f"Invalid status: {status}",
                valid=sorted(STATUS_VALUES),
            )

        with self._store.transaction() as txn:
            statuses = txn.statuses()
            previous = statuses.get(code, CountryStatus.NONE)
            txn.save_statuses(set_status(statuses, code, CountryStatus(status)))
            visit_count = len(txn.visit_dates().get(code, []))

        log.debug("status.set", country=code, status=status, previous=previous.value)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **country_payload(self._catalog.get(code)),
                "status": status,
                "previous_status": previous.value,
                "visit_count": visit_count,
            },
        )

    def list_statuses(self, *, status: str | None = None) -> ServiceResult:
        """List countries that carry a status, optionally filtered."""
        op = "list_statuses"
        if status is not None and status not in STATUS_VALUES:
            return ServiceResult.failure(
                op, "INVALID_INPUT", f"Invalid status: {status}", valid=sorted(STATUS_VALUES)
            )

        dataset = self._store.load_dataset()
        items = [
            {
                **country_payload(self._catalog.get(code)),
                "status": current.value,
                "visit_count": len(dataset.visit_dates.get(code, [])),
            }
            for code, current in dataset.country_statuses.items()
            if status is None or current.value == status
        ]
        items.sort(key=lambda item: (item["region"], item["name"]))
        return ServiceResult(ok=True, op=op, data={"count": len(items), "items": items})

    def add_visit(
        self,
        country_code: str,
        arrival: str,
        *,
        departure: str | None = None,
        transportation: str | None = None,
        note: str | None = None,
        visit_id: str | None = None,
    ) -> ServiceResult:
        """Record a visit. Granularity follows the precision of *arrival*."""
        op = "add_visit"
        code = self._normalize_code(country_code)
        if code not in self._catalog:
            return ServiceResult.failure(
                op, "UNKNOWN_COUNTRY", f"Unknown country code: {code}", code=code
            )
        if transportation is not None and transportation not in TRANSPORTATION_VALUES:
            return ServiceResult.failure(
                op,
                "INVALID_INPUT",
                f"Invalid transportation: {transportation}",
                valid=sorted(TRANSPORTATION_VALUES),
            )

        warnings: list[str] = []
        with self._store.transaction() as txn:
            visit_dates = txn.visit_dates()
            existing_ids = [v.id for visits in visit_dates.values() for v in visits]
            if visit_id is not None and visit_id in existing_ids:
                return ServiceResult.failure(
                    op, "INVALID_INPUT", f"Visit ID already in use: {visit_id}", visit_id=visit_id
                )
            try:
                arrival_date = PartialDate.parse(arrival)
                visit = VisitRecord(
                    id=visit_id or generate_visit_id(existing_ids),
                    arrival_date=arrival_date,
                    departure_date=PartialDate.parse(departure) if departure else None,
                    granularity=arrival_date.granularity,
                    transportation=transportation,
                    note=note,
                )
                updated = add_visit(visit_dates, code, visit)
            except ValueError as exc:
                return ServiceResult.failure(op, "INVALID_INPUT", str(exc), country=code)
            txn.save_visit_dates(updated)
            status = txn.statuses().get(code, CountryStatus.NONE)

        if status != CountryStatus.VISITED:
            warnings.append(
                f"{code} is marked '{status.value}'; its visits are hidden from history"
            )
        log.debug("visit.added", country=code, visit_id=visit.id)
        return ServiceResult(ok=True, op=op, data=visit_payload(code, visit), warnings=warnings)

    def delete_visit(self, country_code: str, visit_id: str) -> ServiceResult:
        op = "delete_visit"
        code = self._normalize_code(country_code)
        with self._store.transaction() as txn:
            visit_dates = txn.visit_dates()
            match = next((v for v in visit_dates.get(code, []) if v.id == visit_id), None)
            if match is None:
                return ServiceResult.failure(
                    op,
                    "NOT_FOUND",
                    f"No visit {visit_id} recorded for {code}",
                    country=code,
                    visit_id=visit_id,
                )
            txn.save_visit_dates(delete_visit(visit_dates, code, visit_id))

        log.debug("visit.deleted", country=code, visit_id=visit_id)
        return ServiceResult(ok=True, op=op, data=visit_payload(code, match))

    def list_visits(self, country_code: str) -> ServiceResult:
        op = "list_visits"
        code = self._normalize_code(country_code)
        dataset = self._store.load_dataset()
        visits = dataset.visit_dates.get(code, [])
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **country_payload(self._catalog.get(code)),
                "status": dataset.country_statuses.get(code, CountryStatus.NONE).value,
                "count": len(visits),
                "items": [visit_payload(code, visit) for visit in visits],
            },
        )

    def list_countries(self, *, region: str | None = None) -> ServiceResult:
        """List the country catalog, optionally restricted to one region."""
        op = "list_countries"
        items = [
            country_payload(country)
            for country in self._catalog
            if region is None or country.region.lower() == region.lower()
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(items), "regions": self._catalog.regions(), "items": items},
        )
