# commerce/core/logging.py
"""Logging for the catalog: structured JSON records under the ``commerce`` namespace."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from commerce.core.config import settings

SERVICE_NAME = "commerce-catalog"
ROOT_LOGGER = "commerce"
PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_STANDARD_ATTRS = set(logging.makeLogRecord({}).__dict__.keys()) | {"message", "asctime"}


def _level(name: str | None, fallback: int = logging.INFO) -> int:
    if not name:
        return fallback
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else fallback


class JsonFormatter(logging.Formatter):
    """One JSON object per record; values passed through ``extra=`` are kept under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = {key: value for key, value in record.__dict__.items() if key not in _STANDARD_ATTRS}
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def build_logging_config(
    level: str | None = None,
    fmt: str | None = None,
    sql_level: str | None = None,
) -> dict[str, Any]:
    """dictConfig payload for the catalog loggers; arguments override ``settings``."""
    resolved = _level(level or settings.LOG_LEVEL)
    formatter = fmt or settings.LOG_FORMAT
    if formatter not in ("json", "plain"):
        raise ValueError(f"Unknown log format: {formatter}")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
            "plain": {"format": PLAIN_FORMAT},
        },
        "handlers": {
            "catalog": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
            }
        },
        "loggers": {
            ROOT_LOGGER: {
                "handlers": ["catalog"],
                "level": resolved,
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "handlers": ["catalog"],
                "level": _level(sql_level or settings.SQL_LOG_LEVEL, logging.WARNING),
                "propagate": False,
            },
        },
    }


def setup_logging(level: str | None = None, fmt: str | None = None, sql_level: str | None = None) -> None:
    """Configure the ``commerce`` and SQLAlchemy loggers; the host's root logger is left alone."""
    logging.config.dictConfig(build_logging_config(level, fmt, sql_level))


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``commerce`` namespace."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
