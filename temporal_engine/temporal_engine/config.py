"""Temporal engine configuration loaded from environment variables."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from temporal_engine.models.network import TimeUnit

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables with TEMPORAL_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="TEMPORAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    debug: bool = False

    # Networks built without an explicit unit
    default_time_unit: TimeUnit = TimeUnit.SECOND

    # Next-available-slot look-ahead
    search_horizon_days: int = Field(default=30, ge=1)

    # Telemetry
    structured_logging: bool = False
    profiling_enabled: bool = True


class SchedulerConfig(BaseModel):
    """Tunable knobs for the interval scheduler."""

    search_horizon_days: int = Field(
        default=30,
        ge=1,
        description="Calendar days searched ahead of earliest_start by find_next_available_slot.",
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> SchedulerConfig:
        return cls(search_horizon_days=settings.search_horizon_days)


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info(
            "Loaded settings: default unit %s, horizon %d day(s)",
            settings.default_time_unit.value,
            settings.search_horizon_days,
        )

    return settings
