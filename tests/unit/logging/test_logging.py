"""
Unit tests for the logging package.
"""

import json
import logging

import pytest

from studdybuddy.logging import LoggingConfig, LoggingContext, StructuredFormatter, get_logger
from studdybuddy.logging.formatters import redact
from studdybuddy.logging.manager import LoggingManager


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    handler = ListHandler()
    logger = logging.getLogger("studdybuddy.tests")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)


class TestLoggingConfig:
    """Test LoggingConfig construction."""

    def test_level_names(self):
        assert LoggingConfig(level="debug").level == logging.DEBUG
        assert LoggingConfig(level=logging.ERROR).level == logging.ERROR

    def test_single_output_becomes_list(self):
        assert LoggingConfig(output="file").output == ["file"]


class TestStuddyBuddyLogger:
    """Test the logger wrapper."""

    def test_extra_context(self, captured):
        logger = get_logger("studdybuddy.tests").with_context(component="client")

        logger.info("Session expired", url="http://host/x")

        record = captured.records[0]
        assert record.getMessage() == "Session expired"
        assert record.extra_context == {"component": "client", "url": "http://host/x"}
        assert record.correlation_id == logger.correlation_id

    def test_no_context_no_extra(self, captured):
        get_logger("studdybuddy.tests").debug("plain")

        assert not hasattr(captured.records[0], "extra_context")


class TestStructuredFormatter:
    """Test JSON output."""

    def test_redacts_tokens(self):
        record = logging.LogRecord("studdybuddy", logging.INFO, __file__, 1, "Logged in", None, None)
        record.correlation_id = "abc"
        record.extra_context = {"refresh_token": "refresh1", "user_id": 7}

        entry = json.loads(StructuredFormatter(version="1.0").format(record))

        assert entry["message"] == "Logged in"
        assert entry["correlation_id"] == "abc"
        assert entry["refresh_token"] == "***"
        assert entry["user_id"] == 7
        assert entry["version"] == "1.0"

    def test_redact_keeps_empty_values(self):
        assert redact({"password": None, "Authorization": "Bearer x"}) == {
            "password": None,
            "Authorization": "***",
        }


class TestLoggingContext:
    """Test entry/success/failure messages."""

    def test_success(self, captured):
        with LoggingContext("Logging in ...", "Logged in.", "Login failed",
                            logger=get_logger("studdybuddy.tests")):
            pass

        assert [r.getMessage() for r in captured.records] == ["Logging in ...", "Logged in."]

    def test_failure_propagates(self, captured):
        with pytest.raises(ValueError):
            with LoggingContext(failure_msg="Login failed", logger=get_logger("studdybuddy.tests")):
                raise ValueError("bad")

        record = captured.records[-1]
        assert record.levelno == logging.ERROR
        assert record.getMessage() == "Login failed: bad"


class TestLoggingManager:
    """Test handler installation."""

    def test_singleton(self):
        assert LoggingManager() is LoggingManager()

    def test_file_output(self, tmp_path):
        manager = LoggingManager()
        log_file = tmp_path / "logs" / "studdybuddy.log"

        manager.configure(LoggingConfig(level="INFO", format_type="json",
                                        output=["file"], file_path=log_file))
        try:
            get_logger("studdybuddy.tests.file").info("written", token="secret")
            for handler in manager.handlers:
                handler.flush()

            entry = json.loads(log_file.read_text().splitlines()[0])
            assert entry["message"] == "written"
            assert entry["token"] == "***"
        finally:
            manager.configure(LoggingConfig(output=[]))

    def test_reconfigure_replaces_handlers(self):
        manager = LoggingManager()
        tree = logging.getLogger("studdybuddy")

        try:
            manager.configure(LoggingConfig(output=["console"]))
            manager.configure(LoggingConfig(output=["console"], format_type="json"))

            assert len(manager.handlers) == 1
            assert tree.handlers == manager.handlers
            assert isinstance(manager.handlers[0].formatter, StructuredFormatter)
        finally:
            manager.configure(LoggingConfig(output=[]))
        assert tree.handlers == []
