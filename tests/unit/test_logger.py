"""Tests for telemetry logger."""

import io
import json
import logging
import sys
from collections.abc import Iterator

import pytest

from witcher.error import Error
from witcher.telemetry import (
    JsonFormatter,
    LogLevel,
    TextFormatter,
    WitcherLogger,
    get_logger,
)


@pytest.fixture
def restore_loggers() -> Iterator[None]:
    """Undo global logger configuration after a test."""
    yield
    for logger in WitcherLogger._loggers.values():
        logger.handlers.clear()
        logger.setLevel(LogLevel.WARNING.to_logging_level())
        logger.propagate = True
    WitcherLogger._handler = None
    WitcherLogger._level = LogLevel.WARNING


def make_record(exc: BaseException | None = None, **fields) -> logging.LogRecord:
    exc_info = (type(exc), exc, exc.__traceback__) if exc is not None else None
    record = logging.LogRecord("witcher.test", logging.ERROR, __file__, 1, "Request failed", None, exc_info)
    if fields:
        record.extra_fields = fields
    return record


def raised(exc: BaseException) -> BaseException:
    try:
        raise exc
    except BaseException as caught:
        return caught


class TestLogLevel:
    """Tests for LogLevel."""

    def test_to_logging_level(self) -> None:
        """Test conversion to standard levels."""
        assert LogLevel.DEBUG.to_logging_level() == logging.DEBUG
        assert LogLevel.ERROR.to_logging_level() == logging.ERROR


class TestTextFormatter:
    """Tests for TextFormatter."""

    def test_fields(self) -> None:
        """Test keyword fields are appended."""
        text = TextFormatter().format(make_record(attempt=2))
        assert "Request failed" in text
        assert text.endswith("| attempt=2")

    def test_error_chain(self) -> None:
        """Test witcher errors render as a summarized chain."""
        err = raised(Error.wrap(Error.wrap(OSError("disk full"), "save failed"), "request failed"))
        text = TextFormatter().format(make_record(err))
        assert text.splitlines()[1:] == [
            " error: request failed",
            " error: save failed",
            " cause: OSError: disk full",
        ]
        assert "Traceback" not in text

    def test_foreign_exception(self) -> None:
        """Test other exceptions keep the interpreter traceback."""
        text = TextFormatter().format(make_record(raised(ValueError("bad"))))
        assert "Traceback" in text
        assert "ValueError: bad" in text


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_structure(self) -> None:
        """Test JSON output fields."""
        data = json.loads(JsonFormatter().format(make_record(attempt=1)))
        assert data["level"] == "ERROR"
        assert data["logger"] == "witcher.test"
        assert data["message"] == "Request failed"
        assert data["attempt"] == 1
        assert data["timestamp"].endswith("Z")

    def test_error_chain(self) -> None:
        """Test witcher errors are rendered into the exception field."""
        err = raised(Error.wrap(KeyError("k"), "lookup failed"))
        data = json.loads(JsonFormatter(include_timestamp=False).format(make_record(err)))
        assert data["exception"] == " error: lookup failed\n cause: KeyError: 'k'"
        assert "timestamp" not in data


class TestWitcherLogger:
    """Tests for WitcherLogger."""

    def test_get_logger(self) -> None:
        """Test getting a logger."""
        logger = get_logger("witcher.test.get")
        assert logger.logger.name == "witcher.test.get"
        assert get_logger("witcher.test.get").logger is logger.logger

    def test_configure(self, restore_loggers: None) -> None:
        """Test configure routes records through the chosen formatter."""
        stream = io.StringIO()
        WitcherLogger.configure(level=LogLevel.DEBUG, format="json", stream=stream)
        logger = get_logger("witcher.test.configure")
        logger.debug("Retrying operation", attempt=1)

        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "Retrying operation"
        assert data["attempt"] == 1

    def test_exception(self, restore_loggers: None) -> None:
        """Test exception() renders the chain being handled."""
        stream = io.StringIO()
        WitcherLogger.configure(level=LogLevel.INFO, format="text", stream=stream)
        logger = get_logger("witcher.test.exception")
        try:
            raise Error.wrap(OSError("disk full"), "save failed")
        except Error:
            assert sys.exc_info()[1] is not None
            logger.exception("Request failed")

        output = stream.getvalue()
        assert " error: save failed" in output
        assert " cause: OSError: disk full" in output

    def test_configure_existing_logger(
        self, restore_loggers: None, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test configure stops loggers created earlier from propagating."""
        logger = get_logger("witcher.test.existing")
        stream = io.StringIO()
        WitcherLogger.configure(level=LogLevel.INFO, format="text", stream=stream)
        logger.info("Cache warmed")

        assert logger.logger.propagate is False
        assert stream.getvalue().count("Cache warmed") == 1
        assert not [r for r in caplog.records if r.name == "witcher.test.existing"]

    def test_level_methods(self, restore_loggers: None) -> None:
        """Test info, warning and error write with their fields."""
        stream = io.StringIO()
        WitcherLogger.configure(level=LogLevel.INFO, format="text", stream=stream)
        logger = get_logger("witcher.test.levels")
        logger.debug("hidden")
        logger.info("Loaded config", path="app.toml")
        logger.warning("Retry budget low", remaining=1)
        logger.error("Giving up", attempts=3)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 3
        assert "| INFO     |" in lines[0]
        assert lines[0].endswith("Loaded config | path=app.toml")
        assert "| WARNING  |" in lines[1]
        assert lines[1].endswith("Retry budget low | remaining=1")
        assert "| ERROR    |" in lines[2]
        assert lines[2].endswith("Giving up | attempts=3")
