"""Tests for the unified logging format.

Target format: 2026-01-06T14:05:52Z [source] LEVEL message
"""

from __future__ import annotations

import io
import logging
import re
import sys
from datetime import datetime

import pytest

from rooming.logging_config import TRACE, ISO8601Formatter, configure_logging, get_logger, resolve_level


def _record(msg="Test message", level=logging.INFO, args=()):
    return logging.LogRecord(name="test", level=level, pathname="", lineno=0, msg=msg, args=args, exc_info=None)


@pytest.fixture
def restore_root_logger(monkeypatch):
    """Keep configure_logging from leaking handlers into other tests."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestISO8601Formatter:
    """Test the custom ISO8601 formatter produces correct output."""

    def test_format_matches_pattern(self):
        output = ISO8601Formatter(source="assign").format(_record())
        pattern = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z \[assign\] INFO Test message$"
        assert re.match(pattern, output), f"Output '{output}' doesn't match expected format"

    def test_timestamp_is_utc(self):
        output = ISO8601Formatter(source="assign").format(_record())
        timestamp_str = output.split(" ")[0]
        assert timestamp_str.endswith("Z")
        assert datetime.fromisoformat(timestamp_str.replace("Z", "+00:00")) is not None

    def test_different_log_levels(self):
        formatter = ISO8601Formatter(source="test")
        for level, level_name in [
            (logging.DEBUG, "DEBUG"),
            (logging.INFO, "INFO"),
            (logging.WARNING, "WARNING"),
            (logging.ERROR, "ERROR"),
            (TRACE, "TRACE"),
        ]:
            assert f"] {level_name} " in formatter.format(_record("Message", level))

    def test_message_formatting_with_args(self):
        output = ISO8601Formatter().format(_record("Room %s has %d members", args=("M-1", 4)))
        assert "[rooming] INFO Room M-1 has 4 members" in output

    def test_exception_text_appended(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("test", logging.ERROR, "", 0, "Failed", (), sys.exc_info())
        output = ISO8601Formatter().format(record)
        assert "Failed\nTraceback" in output
        assert "ValueError: boom" in output


class TestResolveLevel:
    def test_default_is_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert resolve_level() == logging.INFO

    def test_debug_flag(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert resolve_level(debug=True) == logging.DEBUG

    def test_env_trace(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "trace")
        assert resolve_level() == TRACE

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert resolve_level(level=logging.WARNING) == logging.WARNING


class TestConfigureLogging:
    def test_sets_level_from_debug_flag(self, restore_root_logger):
        assert configure_logging(source="test", debug=True).level == logging.DEBUG

    def test_default_level_is_info(self, restore_root_logger):
        assert configure_logging(source="test", debug=False).level == logging.INFO

    def test_single_handler(self, restore_root_logger):
        configure_logging(source="test")
        root = configure_logging(source="test")
        assert len(root.handlers) == 1

    def test_get_logger_returns_named_logger(self):
        assert get_logger("rooming.test").name == "rooming.test"

    def test_end_to_end_log_output(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(source="integration_test", debug=False, stream=stream)
        get_logger("rooming.test").info("Test integration message")
        pattern = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z \[integration_test\] INFO Test integration message\n$"
        assert re.match(pattern, stream.getvalue()), f"Output '{stream.getvalue()}' doesn't match expected format"

    def test_trace_method(self, restore_root_logger):
        stream = io.StringIO()
        configure_logging(source="t", level=TRACE, stream=stream)
        get_logger("rooming.test").trace("very verbose")
        assert "TRACE very verbose" in stream.getvalue()
