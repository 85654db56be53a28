"""
Structured logging for the PrintWatch service: timestamp, event_type, wallet.

structlog with ISO timestamps and the log level; JSON output by default or
the console renderer for local runs. Module-level loggers are lazy, so
configure_structlog() called after Settings load (LOG_FORMAT / LOG_LEVEL from
the environment or .env) applies to loggers created at import time too.

No backend_printwatch imports here; config and the API import this module.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

DEFAULT_LOG_FORMAT = "json"
DEFAULT_LOG_LEVEL = "INFO"


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def level_value(log_level: str) -> int | None:
    """Numeric level for a name like 'warning'; None if the name is unknown."""
    value = logging.getLevelName(log_level.strip().upper())
    return value if isinstance(value, int) else None


def configure_structlog(
    log_format: str = DEFAULT_LOG_FORMAT,
    log_level: str = DEFAULT_LOG_LEVEL,
) -> None:
    """
    (Re)configure structlog. Called once on import with process env defaults
    and again by the entrypoints with the loaded Settings.

    Loggers are not cached and print to the current sys.stdout, so a later
    call takes effect for every logger already handed out.
    """
    level = level_value(log_level) or logging.INFO
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if log_format.strip().lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog(
        os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )


def get_logger(name: str) -> Any:
    """
    Return a lazy structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("daily_totals_computed", wallet=short_wallet(addr), day_count=3)

    Output (JSON): {"event_type": "daily_totals_computed", "wallet": "...", "day_count": 3,
    "timestamp": "...", "level": "info", "logger": "module.name"}
    """
    return structlog.get_logger(name, logger=name)


def short_wallet(address: Any) -> str:
    """First 16 chars of an address for log lines."""
    s = str(address or "")
    return s[:16] + "..." if len(s) > 16 else s
