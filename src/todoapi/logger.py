"""Logging setup and the context-first logger handed to application components.

``setup_logging`` configures the root logger once at startup (plain text for
development, one JSON object per line for production). ``LoggerService``
wraps a stdlib logger with the ``(context, message)`` call style used across
the application and is passed explicitly to the components that log.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("context", "trace"):
            value = record.__dict__.get(key)
            if value:
                log[key] = value
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable formatter that shows the context and any trace."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s [%(context)s] %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "context"):
            record.context = "-"
        line = super().format(record)
        trace = getattr(record, "trace", None)
        if trace:
            line = f"{line}\n{trace.rstrip()}"
        return line


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


class LoggerService:
    """Context-first logger.

    Args:
        name: Name of the underlying stdlib logger.
        production: When true, ``debug`` and ``verbose`` calls are dropped.
    """

    def __init__(self, name: str = "todoapi", production: bool = False) -> None:
        self._logger = logging.getLogger(name)
        self.production = production

    def debug(self, context: str, message: str) -> None:
        if not self.production:
            self._logger.debug(message, extra={"context": context})

    def log(self, context: str, message: str) -> None:
        self._logger.info(message, extra={"context": context})

    def warn(self, context: str, message: str) -> None:
        self._logger.warning(message, extra={"context": context})

    def error(self, context: str, message: str, trace: str | None = None) -> None:
        self._logger.error(message, extra={"context": context, "trace": trace})

    def verbose(self, context: str, message: str) -> None:
        # stdlib has no trace level; verbose output goes out as debug
        if not self.production:
            self._logger.debug(message, extra={"context": context, "verbose": True})
