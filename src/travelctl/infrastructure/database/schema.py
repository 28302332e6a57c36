"""SQLAlchemy Core table definitions for the travelctl database.

Application state lives in a single key-value table. Each value is a
JSON document owned by :mod:`travelctl.infrastructure.store`.
"""

from __future__ import annotations

from sqlalchemy import Column, MetaData, Table, Text

metadata = MetaData()

kv_store = Table(
    "kv_store",
    metadata,
    Column("key", Text, primary_key=True),
    Column("value", Text, nullable=False),  # JSON document
    Column("modified", Text, nullable=False),  # ISO-8601 UTC timestamp
)

STATUSES_KEY = "country_statuses"
VISIT_DATES_KEY = "visit_dates"
VISAS_KEY = "visas"
