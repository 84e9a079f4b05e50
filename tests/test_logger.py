"""
Logger Setup Tests
==================

Covers level selection and the optional per-day log file.
"""

import logging
from datetime import date

import pytest

from heroes.config import Config
from heroes.utils.logger import get_log_file, get_log_level, setup_logger


@pytest.fixture
def fresh_logger_name(request):
    """Unique logger name whose handlers are closed after the test."""
    name = f"heroes.tests.{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestLogLevel:

    def test_debug_flag_wins(self, monkeypatch):
        monkeypatch.setattr(Config, "DEBUG", True)
        monkeypatch.setattr(Config, "LOG_LEVEL", "ERROR")
        assert get_log_level() == logging.DEBUG

    def test_named_level(self, monkeypatch):
        monkeypatch.setattr(Config, "DEBUG", False)
        monkeypatch.setattr(Config, "LOG_LEVEL", "warning")
        assert get_log_level() == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setattr(Config, "DEBUG", False)
        monkeypatch.setattr(Config, "LOG_LEVEL", "chatty")
        assert get_log_level() == logging.INFO


class TestSetupLogger:

    def test_console_only_by_default(self, monkeypatch, fresh_logger_name):
        monkeypatch.setattr(Config, "LOG_TO_FILE", False)
        logger = setup_logger(fresh_logger_name)
        assert len(logger.handlers) == 1
        assert not any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)

    def test_handlers_added_once(self, monkeypatch, fresh_logger_name):
        monkeypatch.setattr(Config, "LOG_TO_FILE", False)
        setup_logger(fresh_logger_name)
        assert len(setup_logger(fresh_logger_name).handlers) == 1

    def test_file_handler_writes_dated_file(self, monkeypatch, tmp_path, fresh_logger_name):
        monkeypatch.setattr(Config, "LOG_TO_FILE", True)
        monkeypatch.setattr(Config, "LOG_DIR", str(tmp_path / "logs"))

        logger = setup_logger(fresh_logger_name)
        logger.warning("level table rebuilt")
        for handler in logger.handlers:
            handler.flush()

        log_file = get_log_file()
        assert log_file.parent == tmp_path / "logs"
        assert "level table rebuilt" in log_file.read_text(encoding="utf-8")

    def test_log_file_name(self, monkeypatch, tmp_path):
        monkeypatch.setattr(Config, "LOG_DIR", str(tmp_path))
        assert get_log_file(date(2024, 3, 9)) == tmp_path / "heroes_engine_20240309.log"
