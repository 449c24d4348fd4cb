"""Structured logging for the Combat Tracker.

Everything logs through structlog. The API and the Streamlit UI call
``configure_logging`` once at startup; library code only calls
``get_logger``.

Tracker errors can be passed straight to a log call as ``error=exc``: the
``expand_tracker_error`` processor replaces them with the error type,
message and details so both renderers get plain values.

Example:
    >>> from combat_tracker.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Combatant added", name="Owlbear", initiative=9)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from combat_tracker.core.exceptions import CombatTrackerError


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("httpx", "watchdog", "asyncio", "uvicorn.access")


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the application name."""
    event_dict.setdefault("app", "combat_tracker")
    return event_dict


def expand_tracker_error(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Flatten a CombatTrackerError passed as ``error``.

    The error becomes ``error`` (its message) and ``error_type``; its
    details are merged in under their own keys unless already present.
    """
    error = event_dict.get("error")
    if isinstance(error, CombatTrackerError):
        event_dict["error"] = error.message
        event_dict["error_type"] = type(error).__name__
        for key, value in error.details.items():
            event_dict.setdefault(key, value)
    return event_dict


def configure_logging(*, level: str = "INFO", json_format: bool = False) -> None:
    """Configure structlog and route standard library logging to stdout.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit one JSON object per line instead of console output.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        expand_tracker_error,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn and streamlit log through the standard library
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=log_level,
        stream=sys.stdout,
        force=True,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind values included in every log entry until cleared.

    Example:
        >>> bind_context(request_id="abc123", method="POST")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context. Called at the end of each request."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "NOISY_LOGGERS",
    "add_app_context",
    "expand_tracker_error",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
