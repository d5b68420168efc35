"""
labourconnect/core/logging.py

Purpose: Logging configuration

- Standardizes log format
- Controls log levels
- Structured JSON logging in production
- Context tracking (user_id, mobile, page)
"""

import logging
import sys
import json
from contextvars import ContextVar
from datetime import datetime, timezone
from labourconnect.core.config import settings

QUIET_LOGGERS = ("httpx", "httpcore", "motor", "pymongo", "uvicorn.access")
CONTEXT_FIELDS = ("user_id", "mobile", "page", "professional_id")

_log_context: ContextVar[dict] = ContextVar("log_context", default={})


def context_fields(record: logging.LogRecord) -> dict:
    """Context fields for a record: LogContext values overridden by extra=."""
    fields = dict(_log_context.get())
    for field in CONTEXT_FIELDS:
        if hasattr(record, field):
            fields[field] = getattr(record, field)
    return {field: fields[field] for field in CONTEXT_FIELDS if field in fields}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for production log shipping."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
            **context_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class DevelopmentFormatter(logging.Formatter):
    """Coloured single-line output with context fields appended."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        name = record.name.removeprefix("labourconnect.")
        message = (
            f"{color}[{self.formatTime(record, '%H:%M:%S')}] {record.levelname:<8}{self.RESET} "
            f"{name}: {record.getMessage()}"
        )

        context_parts = [f"{field}={value}" for field, value in context_fields(record).items()]
        if context_parts:
            message += f" [{', '.join(context_parts)}]"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging():
    """
    Routes every logger to stdout: JSON lines in production, coloured
    one-liners elsewhere.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if settings.is_production else DevelopmentFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root.handlers[:] = [handler]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger("labourconnect")
    logger.debug(f"Logging ready: {settings.ENVIRONMENT}, level {settings.LOG_LEVEL}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger namespaced under "labourconnect." (module names already are)."""
    if name.startswith("labourconnect"):
        return logging.getLogger(name)
    return logging.getLogger(f"labourconnect.{name}")


class LogContext:
    """
    Context manager for adding structured context to logs.

    Context is kept per task, so concurrent requests do not see each
    other's fields. Fields passed via extra= take precedence.

    Usage:
        with LogContext(user_id="abc", page="profile"):
            logger.info("Saving profile")
    """

    def __init__(self, **kwargs):
        self.context = kwargs
        self._token = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.context})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self._token)
