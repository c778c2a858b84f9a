"""Tests for settings and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog

from enumtype.config import LogLevel, Settings, get_settings, reset_settings
from enumtype.core import EnumType
from enumtype.logging import PACKAGE_LOGGER, get_logger, setup_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ENUMTYPE_DEFINITIONS_PATH", raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == LogLevel.INFO
        assert settings.definitions_path == Path("./enums.yaml")

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ENUMTYPE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("ENUMTYPE_DEFINITIONS_PATH", str(tmp_path / "defs.yaml"))
        reset_settings()
        settings = get_settings()
        assert settings.log_level == LogLevel.DEBUG
        assert settings.definitions_path == tmp_path / "defs.yaml"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestLogging:
    @pytest.fixture(autouse=True)
    def restore_logging(self):
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        saved = (package_logger.handlers[:], package_logger.level, package_logger.propagate)
        structlog.reset_defaults()
        yield
        structlog.reset_defaults()
        package_logger.handlers[:], package_logger.level, package_logger.propagate = saved

    def test_silent_until_configured(self, capsys):
        EnumType("Noisy", ["a", "a"])
        get_logger("test").warning("unconfigured_event")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_host_logging_receives_events(self, caplog):
        caplog.set_level(logging.WARNING, logger=PACKAGE_LOGGER)
        EnumType("Noisy", ["a", "a"])
        records = [r for r in caplog.records if r.name == "enumtype.core"]
        assert len(records) == 1
        assert "duplicate_symbol" in records[0].getMessage()

    def test_setup_logging_filters_below_level(self, capsys):
        setup_logging("WARNING", json=True)
        log = get_logger("test")
        log.info("hidden_event")
        log.warning("shown_event", enum="ToastStatus")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "hidden_event" not in captured.err
        assert '"event": "shown_event"' in captured.err
        assert '"logger_name": "test"' in captured.err
        assert '"enum": "ToastStatus"' in captured.err

    def test_setup_logging_defaults_to_settings(self, monkeypatch):
        monkeypatch.setenv("ENUMTYPE_LOG_LEVEL", "ERROR")
        reset_settings()
        setup_logging(json=True)
        assert structlog.get_config()["cache_logger_on_first_use"] is True
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.ERROR
