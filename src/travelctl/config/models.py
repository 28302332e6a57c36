"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, travelctl.toml only contains
overrides. A fresh data directory needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    dirname: str = ".travelctl"
    db_name: str = "travel.db"


class ExportConfig(BaseModel):
    """[export] section."""

    model_config = {"frozen": True}

    filename_prefix: str = "travel-history"


class StatsConfig(BaseModel):
    """[stats] section."""

    model_config = {"frozen": True}

    most_visited_limit: int = Field(default=5, ge=1)


class VisasConfig(BaseModel):
    """[visas] section: urgency thresholds in days."""

    model_config = {"frozen": True}

    critical_days: int = 7
    warning_days: int = 30

    @model_validator(mode="after")
    def _ordered(self) -> VisasConfig:
        if self.warning_days < self.critical_days:
            msg = "warning_days must be >= critical_days"
            raise ValueError(msg)
        return self

