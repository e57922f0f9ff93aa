"""Structured logging configuration and call-site capture.

Uses structlog with stdlib integration. Request-scoped context (like request_id,
bound by ContextRoute) is automatically included in all logs via
structlog.contextvars. The processor chain is the usual structlog + stdlib
setup; what this module adds for the response builder is:

- find_caller(): the function, file and line that called a logging helper, so
  Response.log() and with_message_log() report the handler, not this library
- _renderer(): JSON lines or console lines, chosen by Settings.log_json

Nothing is configured at import time: a host application calls
configure_logging() once at startup. Until then structlog's defaults print
readable lines to stdout.
"""

import inspect
import logging
import logging.config
import sys
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from apiresp.config import Settings
from apiresp.config import settings as default_settings


@dataclass(frozen=True)
class Caller:
    """Source location of a call site."""

    function: str
    file: str
    line: int


UNKNOWN_CALLER = Caller(function="?", file="?", line=0)


def find_caller(skip: int = 0) -> Caller:
    """Return the location that called the function invoking ``find_caller``.

    Args:
        skip: Extra frames to walk past, for wrappers that should not be reported.

    Example:
        def log(err):
            caller = find_caller()  # where log() was called from
    """
    frame = inspect.currentframe()
    try:
        # currentframe -> function that called us -> its caller
        for _ in range(skip + 2):
            if frame is None:
                return UNKNOWN_CALLER
            frame = frame.f_back
        if frame is None:
            return UNKNOWN_CALLER
        return Caller(
            function=frame.f_code.co_name,
            file=frame.f_code.co_filename,
            line=frame.f_lineno,
        )
    finally:
        del frame


def _add_timestamp(
    _logger: object,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO 8601 UTC timestamp with timezone offset."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def _renderer(settings: Settings) -> Processor:
    """Pick the final renderer: JSON lines or colorless console lines."""
    if settings.log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(settings: Settings = default_settings) -> None:
    """Configure structlog to render to stdout.

    Call once at application startup. After this, all loggers created via
    get_logger() share the stdlib root handler and automatic context binding.
    """
    # Processors run on every log event
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,  # Auto-include bound context
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_timestamp,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": _renderer(settings),
                    "foreign_pre_chain": processors,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                    "stream": sys.stdout,
                },
            },
            "loggers": {
                "": {
                    "handlers": ["default"],
                    "level": settings.log_level,
                    "propagate": True,
                },
            },
        }
    )


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name, typically __name__

    Returns:
        Logger with automatic context binding.

    Example:
        logger = get_logger(__name__)
        logger.error("error_logged", error="boom")
        # Output: {"event": "error_logged", "error": "boom", "level": "error", ...}
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
