"""Logging configuration for processes embedding the temporal engine.

The engine itself only emits through module-level loggers.  Host processes
call :func:`configure_telemetry` once at startup to pick a handler:

* plain text (``basicConfig``) by default;
* single-line JSON via :class:`JSONFormatter` when
  ``TEMPORAL_STRUCTURED_LOGGING=true``, for log aggregators that index fields
  without regex parsing.

JSON output schema per line::

    {
        "timestamp": "2025-05-15T12:34:56.789012+00:00",
        "level": "DEBUG",
        "logger": "temporal_engine.scheduling.interval_scheduler",
        "message": "Dropped interval 'patrol': no_constraint",
        "query": { ... },          // present when passed via extra={"query": ...}
        "exc_info": "Traceback ..."  // present only on exceptions
    }
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from temporal_engine.config import Settings
from temporal_engine.telemetry.profiling import QueryTimingCollector

_TEXT_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        query = getattr(record, "query", None)
        if query is not None:
            payload["query"] = query

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc_info"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """Install a root handler according to *settings*."""
    level = logging.DEBUG if settings.debug else logging.INFO

    if settings.structured_logging:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
        return

    logging.basicConfig(level=level, format=_TEXT_FORMAT)


def configure_telemetry(settings: Settings) -> None:
    """Configure logging and toggle query profiling from *settings*."""
    configure_logging(settings)
    QueryTimingCollector.get_instance().enabled = settings.profiling_enabled
    logging.getLogger(__name__).info(
        "Telemetry configured (structured=%s, profiling=%s)",
        settings.structured_logging,
        settings.profiling_enabled,
    )
