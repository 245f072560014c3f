"""Tests for logging configuration."""

import json
import logging

from glicense.logging_config import StructuredFormatter, logger, set_level, setup_logging


def test_package_logger_has_single_handler():
    assert setup_logging() is logger
    assert len(logger.handlers) == 1


def test_set_level_updates_handlers():
    original = logger.level
    try:
        set_level("DEBUG")
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
    finally:
        set_level(logging.getLevelName(original))


def test_structured_formatter_emits_json():
    record = logging.LogRecord("glicense", logging.WARNING, __file__, 1, "lookup failed for %s", ("a/b",), None)
    data = json.loads(StructuredFormatter().format(record))
    assert data["level"] == "WARNING"
    assert data["message"] == "lookup failed for a/b"
    assert data["logger"] == "glicense"
    assert "thread" in data
