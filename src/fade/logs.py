"""Router log sink.

Every fade module logs through a child of the ``fade`` logger. Errors are
recorded before they are raised, so an append-only file handler gives a
timestamped record of every configuration, naming and dispatch failure.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "fade"
DEFAULT_LOG_FILE = os.path.join("logs", "fade", "router.log")

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``fade`` logger or one of its children."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(
    *,
    log_file: str | None = DEFAULT_LOG_FILE,
    level: int | str = logging.INFO,
    json_logs: bool = False,
    to_console: bool = False,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Install handlers on the ``fade`` logger and return it.

    Calling this again replaces the previously installed handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter: logging.Formatter = (
        JSONFormatter() if json_logs else logging.Formatter(_TEXT_FORMAT, datefmt=_DATE_FORMAT)
    )

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, mode="a", maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if to_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def log_error(logger: logging.Logger, exc: BaseException) -> None:
    """Record *exc* on *logger* with its traceback, if it has one."""
    exc_info = (type(exc), exc, exc.__traceback__) if exc.__traceback__ is not None else None
    logger.error("%s: %s", type(exc).__name__, exc, exc_info=exc_info)
