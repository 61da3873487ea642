"""
Shared Logger

Root logging setup for the storefront plus ``ContextLogger``, which attaches
structured fields (cart id, customer id, event id) to each record under
``extra_data``. The JSON formatter emits those fields; the text formats
append them as ``key=value`` pairs.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s%(context)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET_COLOR = "\033[0m"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_data = getattr(record, "extra_data", None)
        if extra_data is not None:
            log_data["extra"] = extra_data

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Pipe separated text with the context fields appended, optionally colored."""

    def __init__(self, colored: bool = False):
        super().__init__(TEXT_FORMAT, datefmt=DATE_FORMAT)
        self.colored = colored

    def formatMessage(self, record: logging.LogRecord) -> str:
        values = dict(record.__dict__)
        extra_data = values.get("extra_data") or {}
        values["context"] = "".join(f" {key}={value}" for key, value in extra_data.items())
        if self.colored:
            color = LEVEL_COLORS.get(record.levelname, RESET_COLOR)
            values["levelname"] = f"{color}{record.levelname}{RESET_COLOR}"
        return self._fmt % values


class ContextLogger:
    """Logger that merges a fixed context with per-call fields."""

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        self._logger = logging.getLogger(name)
        self._context = context or {}

    @property
    def name(self) -> str:
        return self._logger.name

    def with_context(self, **kwargs) -> "ContextLogger":
        """Create new logger with additional context."""
        return ContextLogger(self._logger.name, {**self._context, **kwargs})

    def _log(self, level: int, message: str, **kwargs) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, message, extra={"extra_data": {**self._context, **kwargs}})

    def debug(self, message: str, **kwargs) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log(logging.ERROR, message, **kwargs)


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return JSONFormatter()
    return TextFormatter(colored=format_type == "colored")


def configure_logging(
    level: str = "INFO",
    format_type: str = "colored",
    log_file: str | None = None,
) -> None:
    """
    Configure storefront logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'colored', 'json', or 'plain'
        log_file: Optional file path for file logging (always JSON)
    """
    numeric_level = getattr(logging, level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(_build_formatter(format_type))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)


def get_logger(name: str, context: dict[str, Any] | None = None) -> ContextLogger:
    """Context-aware logger, typically ``get_logger(__name__, {"component": ...})``."""
    return ContextLogger(name, context)


def get_service_logger(service_name: str) -> ContextLogger:
    """Get logger for service modules."""
    return get_logger(f"service.{service_name}", {"component": "service", "service": service_name})
