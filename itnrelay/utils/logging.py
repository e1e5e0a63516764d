"""Structured JSON logging for itnrelay."""

import json
import logging
import os
import traceback
from datetime import UTC, datetime
from typing import Any, ClassVar

ROOT_LOGGER_NAME = "itnrelay"


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    # Standard LogRecord attributes that are not copied into the output
    RESERVED_ATTRS: ClassVar[set[str]] = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }

    # Extra fields whose values must never reach the log stream
    REDACTED_ATTRS: ClassVar[set[str]] = {"passphrase", "signature"}

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted string.
        """
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno >= logging.WARNING:
            log_entry["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        for key, value in record.__dict__.items():
            if key in self.RESERVED_ATTRS or key.startswith("_"):
                continue
            if key in self.REDACTED_ATTRS:
                log_entry[key] = "***"
                continue
            try:
                json.dumps(value)
                log_entry[key] = value
            except (TypeError, ValueError):
                log_entry[key] = str(value)

        return json.dumps(log_entry, default=str)


def configure_logging(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Configure structured JSON logging for the receiver.

    The level comes from ``LOG_LEVEL`` and falls back to INFO when unset or
    unknown.

    Args:
        name: The root logger name.

    Returns:
        Configured logger instance.
    """
    log_level_str = os.environ.get("LOG_LEVEL", "INFO").upper()
    log_level = logging.getLevelName(log_level_str)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Lambda reuses the process between invocations
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    logger.propagate = False

    return logger


def get_logger(module_name: str) -> logging.Logger:
    """Get a child logger of the itnrelay root logger.

    Args:
        module_name: Dotted name of the calling module, relative to the package.

    Returns:
        Child logger instance.
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{module_name}")
