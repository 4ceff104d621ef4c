"""
Tests for logging setup.
"""

import logging
from pathlib import Path

import pytest

from buildctx.core.config.settings import Settings
from buildctx.core.observability.logging_config import _parse_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_level_from_settings(self, restore_root_logger):
        setup_logging(Settings(log_level="INFO"))
        assert restore_root_logger.level == logging.INFO
        assert len(restore_root_logger.handlers) == 1

    def test_override_beats_settings(self, restore_root_logger):
        setup_logging(Settings(log_level="INFO"), level="ERROR")
        assert restore_root_logger.level == logging.ERROR

    def test_file_records_carry_build_env(self, tmp_path: Path, restore_root_logger):
        log_file = tmp_path / "buildctx.log"
        settings = Settings(env="prod", log_file=str(log_file), log_file_level="DEBUG")

        setup_logging(settings)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 2
        logging.getLogger("buildctx.test").debug("hello file")
        for handler in restore_root_logger.handlers:
            handler.flush()
        assert "[prod] buildctx.test: hello file" in log_file.read_text()

    def test_library_loggers_follow_debug(self, restore_root_logger):
        setup_logging(Settings(), level="INFO")
        assert logging.getLogger("yaml").level == logging.WARNING
        setup_logging(Settings(), level="DEBUG")
        assert logging.getLogger("yaml").level == logging.NOTSET


class TestParseLevel:
    def test_known(self):
        assert _parse_level("debug") == logging.DEBUG

    def test_unknown_falls_back(self):
        assert _parse_level("LOUD") == logging.WARNING
        assert _parse_level(None) == logging.WARNING
