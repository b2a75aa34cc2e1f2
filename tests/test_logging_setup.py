#!/usr/bin/env python3
"""
Unit tests for logging setup.
"""

import json
import logging

import pytest

from metrics_influxdb.logging_setup import (
    HttpxRequestFilter,
    set_reporter_log_level,
    setup_logging,
)


def _record(name, level, msg):
    return logging.LogRecord(name, level, __file__, 1, msg, None, None)


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


class TestHttpxRequestFilter:
    """Tests for HttpxRequestFilter."""

    def test_drops_httpx_request_lines(self):
        record = _record("httpx", logging.INFO, 'HTTP Request: POST http://influx:8086/db/app/series "HTTP/1.1 200 OK"')
        assert HttpxRequestFilter().filter(record) is False

    def test_keeps_httpx_warnings(self):
        record = _record("httpx", logging.WARNING, "HTTP Request: failed")
        assert HttpxRequestFilter().filter(record) is True

    def test_keeps_other_loggers(self):
        record = _record("metrics_influxdb.reporter.influxdb", logging.INFO, "HTTP Request: quoted")
        assert HttpxRequestFilter().filter(record) is True


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_stdout_config(self, monkeypatch, restore_root_logging):
        monkeypatch.delenv("METRICS_INFLUXDB_LOGCFG", raising=False)
        setup_logging()
        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert any(isinstance(f, HttpxRequestFilter) for f in handler.filters)

    def test_removes_file_handlers(self, monkeypatch, tmp_path, restore_root_logging):
        monkeypatch.delenv("METRICS_INFLUXDB_LOGCFG", raising=False)
        file_handler = logging.FileHandler(tmp_path / "reporter.log")
        logging.getLogger().addHandler(file_handler)
        setup_logging()
        assert file_handler not in logging.getLogger().handlers

    def test_json_config_file(self, monkeypatch, tmp_path, restore_root_logging):
        cfg = {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": {"null": {"class": "logging.NullHandler"}},
            "root": {"level": "WARNING", "handlers": ["null"]},
        }
        path = tmp_path / "logging.json"
        path.write_text(json.dumps(cfg))
        monkeypatch.setenv("METRICS_INFLUXDB_LOGCFG", str(path))
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0], logging.NullHandler)

    def test_yaml_config_file(self, monkeypatch, tmp_path, restore_root_logging):
        path = tmp_path / "logging.yaml"
        path.write_text(
            "version: 1\n"
            "disable_existing_loggers: false\n"
            "handlers:\n"
            "  quiet:\n"
            "    class: logging.NullHandler\n"
            "root:\n"
            "  level: ERROR\n"
            "  handlers: [quiet]\n"
        )
        monkeypatch.setenv("METRICS_INFLUXDB_LOGCFG", str(path))
        setup_logging()
        assert logging.getLogger().level == logging.ERROR

    def test_set_reporter_log_level(self):
        logger = set_reporter_log_level("debug")
        try:
            assert logger.name == "metrics_influxdb"
            assert logger.level == logging.DEBUG
            assert logger.propagate is True
        finally:
            logger.setLevel(logging.NOTSET)
