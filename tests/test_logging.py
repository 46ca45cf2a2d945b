"""
Tests for logging setup.
"""

import logging

import pytest

from modplan.core.observability.logging_config import (
    ENV_LEVEL,
    resolve_level,
    setup_from_env,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestResolveLevel:

    def test_flags(self, monkeypatch):
        monkeypatch.delenv(ENV_LEVEL, raising=False)
        assert resolve_level(debug=True, verbose=True) == "DEBUG"
        assert resolve_level(verbose=True) == "INFO"
        assert resolve_level(quiet=True) == "ERROR"
        assert resolve_level() == "WARNING"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv(ENV_LEVEL, "INFO")
        assert resolve_level() == "INFO"
        assert resolve_level(quiet=True) == "ERROR"


class TestSetupLogging:

    def test_console_level(self, restore_root_logger):
        setup_logging("INFO")
        assert restore_root_logger.level == logging.INFO
        assert len(restore_root_logger.handlers) == 1

    def test_unknown_level_falls_back(self, restore_root_logger):
        setup_logging("LOUD")
        assert restore_root_logger.level == logging.WARNING

    def test_replaces_handlers(self, restore_root_logger):
        setup_logging("WARNING")
        setup_logging("WARNING")
        assert len(restore_root_logger.handlers) == 1

    def test_file_sink(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "modplan.log"
        setup_logging("ERROR", log_file=str(log_file), log_file_level="DEBUG")
        assert restore_root_logger.level == logging.DEBUG

        logging.getLogger("modplan.test").debug("written to file only")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "written to file only" in log_file.read_text(encoding="utf-8")

    def test_third_party_quieted(self, restore_root_logger):
        setup_logging("INFO")
        assert logging.getLogger("yaml").level == logging.WARNING

    def test_from_env(self, restore_root_logger, tmp_path, monkeypatch):
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("MODPLAN_LOG_FILE", str(log_file))
        monkeypatch.setenv("MODPLAN_LOG_FILE_LEVEL", "INFO")
        setup_from_env("WARNING")
        assert len(restore_root_logger.handlers) == 2
        assert restore_root_logger.level == logging.INFO
