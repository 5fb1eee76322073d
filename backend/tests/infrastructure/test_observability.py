"""Structured Logging: JSON formatter output and setup."""

import json
import logging

from accounts.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "accounts.test", logging.INFO, __file__, 1, "hello %s", ("world",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "accounts.test"
    assert log["message"] == "hello world"
    assert "timestamp" in log


def test_json_formatter_surfaces_known_extras_only():
    log = json.loads(JSONFormatter().format(
        _record(request_id="abc", status_code=201, unrelated="x"),
    ))
    assert log["request_id"] == "abc"
    assert log["status_code"] == 201
    assert "unrelated" not in log


def test_setup_logging_replaces_root_handlers():
    original = logging.root.handlers[:], logging.root.level
    try:
        setup_logging("debug", "text")
        assert logging.root.level == logging.DEBUG
        assert len(logging.root.handlers) == 1
        assert not isinstance(logging.root.handlers[0].formatter, JSONFormatter)

        setup_logging("warning", "json")
        assert isinstance(logging.root.handlers[0].formatter, JSONFormatter)
    finally:
        logging.root.handlers, level = original
        logging.root.setLevel(level)
