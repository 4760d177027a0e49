"""Query timing and logging configuration."""

from __future__ import annotations

from temporal_engine.telemetry.logging_setup import JSONFormatter, configure_logging, configure_telemetry
from temporal_engine.telemetry.profiling import QueryTiming, QueryTimingCollector, profile_query

__all__ = [
    "JSONFormatter",
    "QueryTiming",
    "QueryTimingCollector",
    "configure_logging",
    "configure_telemetry",
    "profile_query",
]
