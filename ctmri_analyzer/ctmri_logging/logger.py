"""
Structured logging: timestamp, level, event_type and keyword context.

structlog with ISO timestamps, log level and consistent keys. Every module
uses get_logger(__name__) and logs a snake_case event name plus context
(e.g. image=..., label=..., probability=...).

Output goes to stderr so the CLI can keep stdout for results.
Uses only Python stdlib logging and structlog; no ctmri_analyzer imports to
avoid circular imports with the config layer.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog._config import BoundLoggerLazyProxy

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# json for aggregation; console for humans
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
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


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    """Print to whatever sys.stderr is at log time (redirects, pytest capture)."""
    return structlog.PrintLogger(file=sys.stderr)


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """
    Configure structlog: JSON (or console), timestamp, level, event_type.

    Safe to call again at runtime (the CLI does once .env is loaded): loggers
    are not cached, so existing module-level loggers pick up the new level
    and renderer on their next call.
    """
    level_value = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    fmt = (fmt or LOG_FORMAT).strip().lower()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
    ]
    if fmt == "json":
        shared_processors.append(_normalize_event)
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


# One-time configuration on first import
if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("image_analyzed", image="slice.png", label="CT", probability=0.91)

    Output (JSON): {"event_type": "image_analyzed", "image": "slice.png", "label": "CT",
    "probability": 0.91, "timestamp": "...", "level": "info", "logger": "module.name"}

    The returned proxy resolves the configuration at each call, so a module
    logger created at import honours a later configure_structlog().
    """
    return BoundLoggerLazyProxy(None, initial_values={"logger": name}, logger_factory_args=())
