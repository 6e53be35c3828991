"""Tests for logging level precedence and log file handling.

Tests verify deterministic log level resolution order:
1. Explicit parameter
2. APP_LOG_LEVEL environment variable
3. Config defaults
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from eve_sso.utils.config import get_config
from eve_sso.utils.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root_logger = logging.getLogger()
    level = root_logger.level
    handlers = list(root_logger.handlers)
    yield
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_explicit_parameter_wins(monkeypatch):
    monkeypatch.setenv("APP_LOG_LEVEL", "INFO")

    setup_logging(log_level="DEBUG")

    assert logging.getLogger().level == logging.DEBUG


def test_environment_variable_beats_config(monkeypatch):
    monkeypatch.setenv("APP_LOG_LEVEL", "ERROR")

    setup_logging()

    assert logging.getLogger().level == logging.ERROR


def test_config_default_used_last():
    setup_logging()

    expected = getattr(logging, get_config().app.log_level.upper())
    assert logging.getLogger().level == expected


def test_level_is_case_insensitive():
    setup_logging(log_level="DeBuG")
    assert logging.getLogger().level == logging.DEBUG


def test_no_file_handler_without_log_dir():
    setup_logging(log_level="INFO")

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert not any(isinstance(h, RotatingFileHandler) for h in handlers)


def test_file_handler_and_retention(tmp_path):
    for i in range(5):
        (tmp_path / f"eve_sso_2024010{i}_000000.log").write_text("old")

    setup_logging(log_level="INFO", log_dir=tmp_path, retention_count=3)

    assert any(
        isinstance(h, RotatingFileHandler) for h in logging.getLogger().handlers
    )
    assert len(list(tmp_path.glob("eve_sso_*.log*"))) == 3
