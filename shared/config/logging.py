"""
Structured logging for the directory admin backend.

Every call takes keyword context next to the message:

    logger.info("Moved to recycle bin", entity_type="job", entity_id=42)

Production writes one JSON object per line; development writes a short
human-readable line with the context appended as key=value pairs.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from shared.config.settings import settings


class StructuredFormatter(logging.Formatter):
    """JSON lines for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if getattr(record, "extra_data", None):
            log_data["data"] = record.extra_data
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """One readable line per record, context appended in parentheses."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        message = f"[{timestamp}] {record.levelname:8} {record.name}: {record.getMessage()}"

        if getattr(record, "extra_data", None):
            message += " (" + " | ".join(f"{k}={v}" for k, v in record.extra_data.items()) + ")"
        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"
        return message


class StructuredLogger(logging.Logger):
    """
    Logger whose level methods accept keyword context.

    `exc_info` is honoured at every level; all other keywords end up in the
    record's `extra_data`.
    """

    def _log_with_data(self, level: int, msg: str, args: tuple, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        exc_info = kwargs.pop("exc_info", None)
        extra = {"extra_data": kwargs or None}
        super()._log(level, msg, args, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.DEBUG, msg, args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.INFO, msg, args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.WARNING, msg, args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.ERROR, msg, args, **kwargs)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log_with_data(logging.CRITICAL, msg, args, **kwargs)


logging.setLoggerClass(StructuredLogger)


def setup_logging() -> None:
    """Install the stdout handler on the root logger. Call once at startup."""
    log_level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if settings.environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(DevelopmentFormatter())

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Usage:
        from shared.config.logging import get_logger
        logger = get_logger(__name__)

        logger.error("Failed to write version snapshot", entity_id=42, exc_info=True)
    """
    return logging.getLogger(name)  # type: ignore


def mask_email(email: str | None) -> str:
    """
    Hide most of the local part of an address before it reaches the logs.

    "ops@example.com" -> "op***@example.com"
    """
    if not email or "@" not in email:
        return "<no-email>" if not email else "***@invalid"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


rest_api_logger = get_logger("rest_api")
maintenance_logger = get_logger("rest_api.maintenance")
