"""
Tests — logging setup.
"""

import json
import logging

from bountyhub.middleware.logging_config import JSONFormatter, configure_logging


def _record(**extra):
    record = logging.LogRecord("bountyhub.timing", logging.INFO, __file__, 1, "Request: %s", ("GET",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_request_fields_included(self):
        line = JSONFormatter().format(_record(method="GET", path="/api/programs", status=200, user_id=None))
        entry = json.loads(line)
        assert entry["message"] == "Request: GET"
        assert entry["level"] == "INFO"
        assert entry["path"] == "/api/programs"
        assert entry["status"] == 200
        assert "user_id" not in entry

    def test_unrelated_attributes_ignored(self):
        entry = json.loads(JSONFormatter().format(_record(password="hunter22")))
        assert "password" not in entry


class TestConfigureLogging:
    def test_single_root_handler(self, app):
        configure_logging(app)
        configure_logging(app)
        assert len(logging.getLogger().handlers) == 1

    def test_level_from_environment(self, app, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        configure_logging(app)
        assert logging.getLogger().level == logging.WARNING
        monkeypatch.delenv("LOG_LEVEL")
        configure_logging(app)
