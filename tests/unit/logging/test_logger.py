# tests/unit/logging/test_logger.py — v3
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging

from firstcontact.logging.context import clear_context, set_request_context, set_tier_context
from firstcontact.logging.logger import (
    ROOT_LOGGER,
    JsonFormatter,
    TextFormatter,
    setup_logging,
)


def _record(msg: str, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=exc_info,
    )


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record("Hello")))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_request_context("navigator", "a" * 64)
        set_tier_context("cheap-model")
        parsed = json.loads(JsonFormatter().format(_record("test msg")))
        assert parsed["context"] == {
            "task": "navigator", "fingerprint": "a" * 12, "tier": "cheap-model",
        }

    def test_format_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys

            record = _record("failed", exc_info=sys.exc_info())
        parsed = json.loads(JsonFormatter().format(record))
        assert "RuntimeError: boom" in parsed["exception"]


class TestTextFormatter:
    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_includes_task_and_tier(self):
        set_request_context("triage", "f" * 64)
        set_tier_context("rules")
        output = TextFormatter().format(_record("resolved"))
        assert "[triage]" in output
        assert "(rules)" in output


class TestSetupLogging:
    def teardown_method(self):
        for handler in logging.getLogger(ROOT_LOGGER).handlers:
            handler.close()
        logging.getLogger(ROOT_LOGGER).handlers.clear()

    def test_console_only(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger(ROOT_LOGGER)
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_reinit_does_not_duplicate(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "router.log"
        setup_logging(log_file=log_file, rotation="1MB", backups=2)
        logging.getLogger(f"{ROOT_LOGGER}.router").warning("written")
        for handler in logging.getLogger(ROOT_LOGGER).handlers:
            handler.flush()
        assert "written" in log_file.read_text()
