"""Structured Logging — JSON output with listkeep extras."""

import json
import logging

import pytest

import listkeep.infrastructure.observability as observability
from listkeep.config import get_settings
from listkeep.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "listkeep.test", logging.INFO, __file__, 1, "Saved %s", ("published",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "INFO"
    assert out["logger"] == "listkeep.test"
    assert out["message"] == "Saved published"
    assert "timestamp" in out


def test_json_formatter_surfaces_extras():
    out = json.loads(JSONFormatter().format(_record(list_id=3, version_id=9, pruned=2)))
    assert out["list_id"] == 3
    assert out["version_id"] == 9
    assert out["pruned"] == 2
    assert "cache_key" not in out


@pytest.fixture
def root_logging(monkeypatch):
    """Restore root handlers and level after the test."""
    monkeypatch.setattr(observability, "_installed", None)
    handlers, level = list(logging.root.handlers), logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def test_json_formatter_stringifies_odd_values():
    out = json.loads(JSONFormatter().format(_record(operation=("a", 1), cache_key=object())))
    assert out["operation"] == ["a", 1]
    assert out["cache_key"].startswith("<object")


def test_setup_logging_installs_handler(root_logging):
    handler = setup_logging("debug", "text")
    assert handler in logging.root.handlers
    assert logging.root.level == logging.DEBUG
    assert not isinstance(handler.formatter, JSONFormatter)
    assert handler.formatter.format(_record()).endswith("[-]: Saved published")


def test_setup_logging_replaces_its_own_handler(root_logging):
    first = setup_logging("info", "json")
    second = setup_logging("info", "json")
    assert first not in logging.root.handlers
    assert logging.root.handlers.count(second) == 1


def test_setup_logging_defaults_from_settings(root_logging, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_FORMAT", "json")
    get_settings.cache_clear()
    try:
        handler = setup_logging()
    finally:
        get_settings.cache_clear()
    assert isinstance(handler.formatter, JSONFormatter)
    assert logging.root.level == logging.WARNING
