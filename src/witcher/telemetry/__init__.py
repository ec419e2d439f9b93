"""
Telemetry module for witcher.

Provides structured logging with chain-aware exception rendering.
"""

from witcher.telemetry.logger import (
    JsonFormatter,
    LogLevel,
    TextFormatter,
    WitcherLogger,
    format_exc_info,
    get_logger,
)

__all__ = [
    "JsonFormatter",
    "LogLevel",
    "TextFormatter",
    "WitcherLogger",
    "format_exc_info",
    "get_logger",
]
