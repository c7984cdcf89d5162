"""Tests for JSON and console log formatters."""

import json
import logging
import sys

import pytest

from core.logging.context import clear_log_context, set_log_context
from core.logging.formatters import ConsoleFormatter, JSONFormatter


def _make_record(
    msg="test message",
    level=logging.INFO,
    name="test.logger",
    exc_info=None,
    **extras,
):
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def clear_context():
    clear_log_context()
    yield
    clear_log_context()


class TestJSONFormatter:

    def test_formats_basic_json_with_required_fields(self):
        output = json.loads(JSONFormatter().format(_make_record()))

        assert output["level"] == "INFO"
        assert output["logger"] == "test.logger"
        assert output["message"] == "test message"
        assert output["ts"].endswith("Z")

    def test_includes_context_fields(self):
        set_log_context(run_id="r-1", stage="read", asset_id="a1")
        output = json.loads(JSONFormatter().format(_make_record()))

        assert output["run_id"] == "r-1"
        assert output["stage"] == "read"
        assert output["asset_id"] == "a1"
        assert "connection_id" not in output

    def test_omits_empty_context(self):
        output = json.loads(JSONFormatter().format(_make_record()))

        for field in ("run_id", "stage", "asset_id", "connection_id"):
            assert field not in output

    def test_includes_extra_fields(self):
        record = _make_record(http_method="GET", api_host="api.host.name", context="source")
        output = json.loads(JSONFormatter().format(record))

        assert output["http_method"] == "GET"
        assert output["api_host"] == "api.host.name"
        assert output["context"] == "source"

    def test_ignores_unknown_extras(self):
        output = json.loads(JSONFormatter().format(_make_record(something_else="x")))
        assert "something_else" not in output

    def test_coerces_numeric_fields(self):
        record = _make_record(http_status="404", duration_ms="12.5", num_partitions="abc")
        output = json.loads(JSONFormatter().format(record))

        assert output["http_status"] == 404
        assert output["duration_ms"] == 12.5
        assert output["num_partitions"] is None

    def test_redacts_sensitive_url_params(self):
        record = _make_record(http_url="https://iam.host/token?apikey=secret&grant_type=x")
        output = json.loads(JSONFormatter().format(record))

        assert "secret" not in output["http_url"]
        assert "apikey=[REDACTED]" in output["http_url"]
        assert "grant_type=x" in output["http_url"]

    def test_redacts_bearer_tokens_in_message(self):
        record = _make_record(msg="Authorization: Bearer eyJhbGciOi.abc-def")
        output = json.loads(JSONFormatter().format(record))

        assert output["message"] == "Authorization: Bearer [REDACTED]"

    def test_file_location_for_debug_and_errors(self):
        formatter = JSONFormatter()

        debug = json.loads(formatter.format(_make_record(level=logging.DEBUG)))
        info = json.loads(formatter.format(_make_record(level=logging.INFO)))

        assert debug["file"] == "test.py:42"
        assert "file" not in info

    def test_includes_exception(self):
        try:
            raise ValueError("bad value")
        except ValueError:
            exc_info = sys.exc_info()

        output = json.loads(JSONFormatter().format(_make_record(level=logging.ERROR, exc_info=exc_info)))

        assert output["exception"]["type"] == "ValueError"
        assert output["exception"]["message"] == "bad value"
        assert "Traceback" in output["exception"]["stacktrace"]


class TestConsoleFormatter:

    @pytest.fixture
    def formatter(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = False
        return formatter

    def test_basic_format(self, formatter):
        output = formatter.format(_make_record())

        assert " - INFO - test message" in output

    def test_includes_stage_and_tags(self, formatter):
        set_log_context(run_id="r-1", stage="write", connection_id="0123456789abcdef")
        output = formatter.format(_make_record())

        assert "[write]" in output
        assert "[r-1]" in output
        assert "[conn:01234567]" in output

    def test_truncates_asset_id(self, formatter):
        set_log_context(asset_id="abcdefghijkl")
        assert "[asset:abcdefgh]" in formatter.format(_make_record())

    def test_colors_when_enabled(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = True

        output = formatter.format(_make_record(level=logging.ERROR))

        assert "\033[31mERROR\033[0m" in output

    def test_appends_traceback(self, formatter):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()

        output = formatter.format(_make_record(exc_info=exc_info))

        assert "RuntimeError: boom" in output
