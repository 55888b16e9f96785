"""Tests for the logger utility."""

import json
import logging
import os
import sys
import time

from urlfetch.utils.logger import JsonFormatter, cleanup_old_logs, get_logger


def _close(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestGetLogger:
    def test_creates_log_files(self, _isolated_home):
        logger = get_logger("urlfetch.test.files")
        try:
            logger.info("hello")
            logger.error("bad")
            log_dir = _isolated_home / "logs"
            assert "hello" in (log_dir / "urlfetch.log").read_text(encoding="utf-8")
            assert "bad" in (log_dir / "urlfetch.errors.log").read_text(encoding="utf-8")
            assert "hello" not in (log_dir / "urlfetch.errors.log").read_text(encoding="utf-8")
            record = json.loads((log_dir / "urlfetch.json").read_text(encoding="utf-8").splitlines()[0])
            assert record["message"] == "hello"
        finally:
            _close(logger)

    def test_configured_once(self):
        logger = get_logger("urlfetch.test.once")
        try:
            count = len(logger.handlers)
            assert get_logger("urlfetch.test.once") is logger
            assert len(logger.handlers) == count
        finally:
            _close(logger)

    def test_level_override(self):
        logger = get_logger("urlfetch.test.level", level=logging.WARNING)
        try:
            assert logger.level == logging.WARNING
        finally:
            _close(logger)


class TestJsonFormatter:
    def test_exception_info(self):
        try:
            raise ValueError("nope")
        except ValueError:
            exc_info = sys.exc_info()
        record = logging.LogRecord(
            "x", logging.ERROR, __file__, 1, "failed %s", ("here",), exc_info=exc_info
        )
        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "failed here"
        assert data["level"] == "ERROR"
        assert "ValueError: nope" in data["exception"]

    def test_fetch_context_fields(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "Fetched", (), None)
        record.url = "https://example.com"
        record.status_code = 200
        record.duration_ms = 12
        data = json.loads(JsonFormatter().format(record))
        assert data["url"] == "https://example.com"
        assert data["status_code"] == 200
        assert data["duration_ms"] == 12
        assert "method" not in data

    def test_extra_reaches_json_log(self, _isolated_home):
        logger = get_logger("urlfetch.test.extra")
        try:
            logger.info("Fetched", extra={"url": "https://example.com", "method": "http"})
            line = (_isolated_home / "logs" / "urlfetch.json").read_text(encoding="utf-8").splitlines()[0]
            record = json.loads(line)
            assert record["url"] == "https://example.com"
            assert record["method"] == "http"
        finally:
            _close(logger)


class TestCleanup:
    def test_removes_old_files(self, _isolated_home):
        log_dir = _isolated_home / "logs"
        log_dir.mkdir(parents=True)
        old = log_dir / "urlfetch.log.3"
        fresh = log_dir / "urlfetch.log"
        old.write_text("old")
        fresh.write_text("new")
        stale = time.time() - 40 * 24 * 60 * 60
        os.utime(old, (stale, stale))

        assert cleanup_old_logs(days=30) == 1
        assert not old.exists()
        assert fresh.exists()

    def test_keeps_live_files_even_when_old(self, _isolated_home):
        log_dir = _isolated_home / "logs"
        log_dir.mkdir(parents=True)
        live = log_dir / "urlfetch.json"
        live.write_text("{}")
        stale = time.time() - 40 * 24 * 60 * 60
        os.utime(live, (stale, stale))

        assert cleanup_old_logs(days=30) == 0
        assert live.exists()

    def test_missing_log_dir(self):
        assert cleanup_old_logs() == 0
