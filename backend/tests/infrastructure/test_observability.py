"""Structured Logging — JSONFormatter output and setup_logging.

Invariants:
    - Every line is one JSON object with timestamp/level/logger/message
    - Known extra fields are copied, unknown ones ignored
    - Exceptions rendered under "exception"
    - Repeated setup replaces the handler instead of stacking another
"""

import json
import logging
import sys

from recordstore.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", exc_info=None, **extra):
    record = logging.LogRecord(
        "recordstore.test", logging.WARNING, __file__, 1, msg, None, exc_info,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    line = json.loads(JSONFormatter().format(_record()))
    assert line["level"] == "WARNING"
    assert line["logger"] == "recordstore.test"
    assert line["message"] == "hello"
    assert "timestamp" in line


def test_json_formatter_copies_known_extras_only():
    line = json.loads(JSONFormatter().format(_record(
        record_kind="tasks", snapshot_path="/tmp/db.json", password="nope",
    )))
    assert line["record_kind"] == "tasks"
    assert line["snapshot_path"] == "/tmp/db.json"
    assert "password" not in line


def test_json_formatter_renders_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = _record(exc_info=sys.exc_info())
    line = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in line["exception"]


def test_setup_logging_sets_level_and_formatter():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        setup_logging("debug", "json")
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) == 1
        assert isinstance(added[0].formatter, JSONFormatter)
        assert logging.root.level == logging.DEBUG
    finally:
        for h in logging.root.handlers[:]:
            if h not in before:
                logging.root.removeHandler(h)
        logging.root.setLevel(level)


def test_setup_logging_twice_keeps_one_handler():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        setup_logging("info", "json")
        setup_logging("warning", "text")
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) == 1
        assert not isinstance(added[0].formatter, JSONFormatter)
        assert logging.root.level == logging.WARNING
    finally:
        for h in logging.root.handlers[:]:
            if h not in before:
                logging.root.removeHandler(h)
        logging.root.setLevel(level)
