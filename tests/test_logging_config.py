"""Tests for structured logging."""

import json
import logging

from deploy_dashboard.logging_config import ColoredConsoleFormatter, StructuredFormatter
from deploy_dashboard.utils.error_utils import reset_correlation_id, set_correlation_id


def make_record(msg="Configuration loaded", level=logging.INFO, **extra):
    record = logging.LogRecord(
        name="deploy_dashboard.test",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_outputs_single_json_line(self):
        output = StructuredFormatter().format(make_record(variable="PORT", attempts=2))

        assert "\n" not in output
        entry = json.loads(output)
        assert entry["level"] == "INFO"
        assert entry["logger"] == "deploy_dashboard.test"
        assert entry["message"] == "Configuration loaded"
        assert entry["extra"] == {"variable": "PORT", "attempts": 2}

    def test_includes_correlation_id(self):
        token = set_correlation_id("corr-42")
        try:
            entry = json.loads(StructuredFormatter().format(make_record()))
        finally:
            reset_correlation_id(token)

        assert entry["correlation_id"] == "corr-42"

    def test_non_serializable_extra_is_stringified(self):
        entry = json.loads(StructuredFormatter().format(make_record(path=object())))

        assert isinstance(entry["extra"]["path"], str)

    def test_exception_info(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys
            record = make_record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["exception"]["type"] == "ValueError"
        assert entry["exception"]["message"] == "boom"


class TestColoredConsoleFormatter:
    def test_error_lines_include_location(self):
        output = ColoredConsoleFormatter().format(make_record("failed", level=logging.ERROR))

        assert "failed" in output
        assert "ERROR" in output
        assert "test_logging_config.py:10" in output
