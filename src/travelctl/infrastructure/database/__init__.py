"""SQLite key-value database via SQLAlchemy Core."""

from travelctl.infrastructure.database.engine import create_db_engine, init_database
from travelctl.infrastructure.database.schema import (
    STATUSES_KEY,
    VISAS_KEY,
    VISIT_DATES_KEY,
    kv_store,
    metadata,
)

__all__ = [
    "STATUSES_KEY",
    "VISAS_KEY",
    "VISIT_DATES_KEY",
    "create_db_engine",
    "init_database",
    "kv_store",
    "metadata",
]
