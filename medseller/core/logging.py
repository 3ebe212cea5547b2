"""Structured logging configuration for the MedSeller assistant.

This module provides JSON-formatted logging suitable for production environments
and a colored formatter for local development.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any


# Record attributes copied into JSON output when a call passes them via `extra`
_EXTRA_KEYS = (
    "event",
    "intent",
    "source",
    "query_preview",
    "duration_ms",
    "status_code",
    "products_count",
    "error",
)


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def __init__(
        self,
        *,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_path: bool = False,
        extra_fields: dict[str, Any] | None = None,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_path = include_path
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        log_data: dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = datetime.now(UTC).isoformat()

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_logger:
            log_data["logger"] = record.name

        log_data["message"] = record.getMessage()

        if self.include_path:
            log_data["path"] = f"{record.pathname}:{record.lineno}"
            log_data["function"] = record.funcName

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        log_data.update(self.extra_fields)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class PrettyFormatter(logging.Formatter):
    """Human-readable formatter for development/debugging."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        color = self.COLORS.get(record.levelname, "")

        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
        level = f"{color}{record.levelname:8}{self.RESET}"
        logger_name = record.name[:28].ljust(28)
        output = f"{timestamp} | {level} | {logger_name} | {record.getMessage()}"

        if record.exc_info:
            output += f"\n{self.formatException(record.exc_info)}"

        return output


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    include_path: bool = False,
    service_name: str = "medseller",
) -> None:
    """Configure logging for the application.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON format (True) or pretty format (False)
        include_path: Include source file path in logs
        service_name: Service name to include in JSON logs
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if json_format:
        formatter: logging.Formatter = JSONFormatter(
            include_path=include_path,
            extra_fields={"service": service_name},
        )
    else:
        formatter = PrettyFormatter()

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


LOG_EVENT_TITLES: dict[str, str] = {
    "catalog_loaded": "📦 Catalog: loaded",
    "catalog_load_failed": "💥 Catalog: no product data",
    "intent_matched": "🎯 Intent: matched locally",
    "intent_no_match": "🤷 Intent: no local match",
    "remote_fallback_called": "🛰️ Remote: asking chat proxy",
    "remote_fallback_failed": "🆘 Remote: failed, advisory sent",
    "assistant_answered": "🏁 Assistant: answered",
}


def log_event(
    logger: logging.Logger,
    *,
    event: str,
    level: str | None = None,
    **kwargs: Any,
) -> None:
    """Structured event logging helper.

    The message is the event title followed by `key=value` pairs; the same
    pairs are attached as record attributes for the JSON formatter.

    Args:
        logger: Logger instance to use
        event: Event name (key in LOG_EVENT_TITLES)
        level: Log level (debug, info, warning, error, critical)
        **kwargs: Additional context fields (intent, source, duration_ms, ...)
    """
    lvl = (level or "info").lower()
    log_fn = getattr(logger, lvl, logger.info)

    title = LOG_EVENT_TITLES.get(event, event)
    details = " ".join(f"{k}={v}" for k, v in kwargs.items() if v is not None)
    message = f"{title} | {details}" if details else title

    log_fn(message, extra={"event": event, **kwargs})


def safe_preview(value: Any, max_len: int = 120) -> str:
    """Return a safe string preview of value."""
    if value is None:
        return ""
    text = str(value).replace("\n", " ")
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
