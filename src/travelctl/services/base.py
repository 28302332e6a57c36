"""BaseService — shared foundation for travelctl services.

Every service receives a :class:`TravelStore` at construction time and
owns its transaction boundaries via ``self._store.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from travelctl.domain.catalog import CountryCatalog, load_catalog

if TYPE_CHECKING:
    from travelctl.config.settings import TravelSettings
    from travelctl.infrastructure.store import TravelStore


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class TrackingService(BaseService):
            def set_status(self, code: str, status: str) -> ServiceResult:
                with self._store.transaction() as txn:
                    ...
    """

    def __init__(self, store: TravelStore, *, catalog: CountryCatalog | None = None) -> None:
        self._store = store
        self._catalog = load_catalog() if catalog is None else catalog

    @property
    def _settings(self) -> TravelSettings:
        return self._store.settings

    def _normalize_code(self, code: str) -> str:
        """Upper-case and trim a country code."""
        return code.strip().upper()
