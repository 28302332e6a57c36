"""VisaService — record visas and rank them by urgency."""

from __future__ import annotations

from datetime import date
from typing import Any

import structlog
from pydantic import ValidationError

from travelctl.domain.ids import generate_visa_id
from travelctl.domain.types import VisaType
from travelctl.domain.visas import VisaRecord, VisaStatus, rank_visas
from travelctl.services.base import BaseService
from travelctl.services.result import ServiceResult
from travelctl.services.tracking import country_payload

log = structlog.get_logger(__name__)


def _status_payload(status: VisaStatus) -> dict[str, Any]:
    return {
        **status.visa.to_dict(),
        "country": country_payload(status.country),
        "days_until_expiry": status.days_until_expiry,
        "remaining_days": status.remaining_days,
        "urgency": status.urgency.value,
        "expiry_urgency": status.expiry_urgency.value,
        "stay_urgency": status.stay_urgency.value,
    }


class VisaService(BaseService):
    """Visa bookkeeping over the ``visas`` document."""

    def add_visa(
        self,
        country_code: str,
        *,
        visa_type: str = VisaType.TOURIST.value,
        issue_date: date,
        expiry_date: date,
        max_stay_days: int,
        total_days_used: int = 0,
        is_schengen: bool = False,
        multiple_entry: bool = False,
        note: str | None = None,
    ) -> ServiceResult:
        op = "add_visa"
        code = self._normalize_code(country_code)
        if code not in self._catalog:
            return ServiceResult.failure(
                op, "UNKNOWN_COUNTRY", f"Unknown country code: {code}", code=code
            )

        with self._store.transaction() as txn:
            visas = txn.visas()
            try:
                visa = VisaRecord(
                    id=generate_visa_id(
                        code, expiry_date.isoformat(), (existing.id for existing in visas)
                    ),
                    country_code=code,
                    type=visa_type,
                    is_schengen=is_schengen,
                    issue_date=issue_date,
                    expiry_date=expiry_date,
                    max_stay_days=max_stay_days,
                    total_days_used=total_days_used,
                    multiple_entry=multiple_entry,
                    note=note,
                )
            except ValidationError as exc:
                errors = exc.errors()
                message = str(errors[0]["msg"]) if errors else str(exc)
                return ServiceResult.failure(op, "INVALID_INPUT", message, country=code)
            txn.save_visas([*visas, visa])

        log.debug("visa.added", visa_id=visa.id, country=code)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **visa.to_dict(),
                "country": country_payload(self._catalog.get(code)),
                "remaining_days": visa.remaining_days,
            },
        )

    def delete_visa(self, visa_id: str) -> ServiceResult:
        op = "delete_visa"
        with self._store.transaction() as txn:
            visas = txn.visas()
            kept = [visa for visa in visas if visa.id != visa_id]
            if len(kept) == len(visas):
                return ServiceResult.failure(
                    op, "NOT_FOUND", f"No visa with ID {visa_id}", visa_id=visa_id
                )
            txn.save_visas(kept)

        log.debug("visa.deleted", visa_id=visa_id)
        return ServiceResult(ok=True, op=op, data={"id": visa_id})

    def overview(self, *, today: date | None = None) -> ServiceResult:
        """Active visas ranked by urgency, plus expired visas."""
        current = today or date.today()
        thresholds = self._settings.visas
        ranked = rank_visas(
            self._store.load_visas(),
            current,
            self._catalog,
            critical_days=thresholds.critical_days,
            warning_days=thresholds.warning_days,
        )
        return ServiceResult(
            ok=True,
            op="visas",
            data={
                "today": current.isoformat(),
                "active_count": len(ranked.active),
                "expired_count": len(ranked.expired),
                "active": [_status_payload(status) for status in ranked.active],
                "expired": [
                    {
                        **visa.to_dict(),
                        "country": country_payload(self._catalog.get(visa.country_code)),
                    }
                    for visa in ranked.expired
                ],
            },
        )
