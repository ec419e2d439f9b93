"""
Structured logging for witcher.

Wraps the standard logging module with keyword-field logging and formatters
that render witcher error chains found in `exc_info` as summarized chains
rather than interpreter tracebacks.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from enum import Enum
from typing import Any, ClassVar

from witcher.config import RenderOptions
from witcher.error import Error


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)


def format_exc_info(formatter: logging.Formatter, exc_info: Any) -> str:
    """Render exception info, using the chain summary for witcher errors."""
    exc = exc_info[1] if isinstance(exc_info, tuple) else None
    if isinstance(exc, Error):
        return exc.detailed(RenderOptions.plain())
    return formatter.formatException(exc_info)


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def __init__(self, include_timestamp: bool = True) -> None:
        super().__init__()
        self._include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self._include_timestamp:
            log_data["timestamp"] = time.strftime(
                "%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)
            ) + f".{int(record.msecs):03d}Z"

        # Add extra fields
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        # Add exception info
        if record.exc_info:
            log_data["exception"] = format_exc_info(self, record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""

    def __init__(self, include_fields: bool = True) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self._include_fields = include_fields

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text."""
        exc_info, exc_text = record.exc_info, record.exc_text
        record.exc_info, record.exc_text = None, None
        try:
            result = super().format(record)
        finally:
            record.exc_info, record.exc_text = exc_info, exc_text

        fields = getattr(record, "extra_fields", None)
        if self._include_fields and fields:
            result = f"{result} | " + " ".join(f"{k}={v}" for k, v in fields.items())

        if exc_info:
            result = f"{result}\n{format_exc_info(self, exc_info)}"
        return result


class WitcherLogger:
    """Logger with keyword-field support.

    Example:
        >>> logger = WitcherLogger.get_logger("witcher.resilience")
        >>> logger.debug("Retrying operation", attempt=1)
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel] = LogLevel.WARNING
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(
        cls,
        level: LogLevel = LogLevel.INFO,
        format: str = "text",
        stream: Any = None,
    ) -> None:
        """Configure global logging settings.

        Args:
            level: Log level
            format: Output format ('json' or 'text')
            stream: Output stream (default: stderr)
        """
        cls._level = level

        formatter: logging.Formatter = JsonFormatter() if format == "json" else TextFormatter()

        cls._handler = logging.StreamHandler(stream or sys.stderr)
        cls._handler.setFormatter(formatter)
        cls._handler.setLevel(level.to_logging_level())

        # Update existing loggers
        for logger in cls._loggers.values():
            logger.handlers.clear()
            logger.addHandler(cls._handler)
            logger.setLevel(level.to_logging_level())
            logger.propagate = False

    @classmethod
    def get_logger(cls, name: str) -> WitcherLogger:
        """Get or create a logger."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            logger.setLevel(cls._level.to_logging_level())

            if cls._handler:
                logger.handlers.clear()
                logger.addHandler(cls._handler)
                logger.propagate = False

            cls._loggers[name] = logger

        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(
        self, level: int, msg: str, exc_info: Any = False, **kwargs: Any
    ) -> None:
        extra = {"extra_fields": kwargs} if kwargs else {}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: Any = False, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log the exception being handled, chain-aware for witcher errors."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)


def get_logger(name: str) -> WitcherLogger:
    """Get a logger instance."""
    return WitcherLogger.get_logger(name)
