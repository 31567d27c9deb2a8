"""Tests for logging setup."""

import logging

import pytest

from polymetrics.logging_config import get_logger, level_for, setup_logging


@pytest.fixture(autouse=True)
def restore_level():
    logger = logging.getLogger("polymetrics")
    level = logger.level
    yield
    logger.setLevel(level)


class TestSetupLogging:
    def test_default_level_is_warning(self):
        assert setup_logging().level == logging.WARNING

    def test_verbose_and_quiet(self):
        assert setup_logging(verbose=True).level == logging.DEBUG
        assert setup_logging(quiet=True).level == logging.ERROR

    def test_verbosity_wins_over_flags(self):
        assert setup_logging(verbose=True, verbosity="quiet").level == logging.ERROR
        assert setup_logging(verbosity="verbose").level == logging.DEBUG

    def test_level_for_unknown_verbosity(self):
        assert level_for("loud") == logging.WARNING

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logging(log_file=str(log_file))
        get_logger("graph.builder").warning("unresolved module")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "unresolved module" in log_file.read_text()
        assert logger.name == "polymetrics"


class TestGetLogger:
    def test_prefixes_names(self):
        assert get_logger("graph").name == "polymetrics.graph"
        assert get_logger("polymetrics.cli").name == "polymetrics.cli"
        assert get_logger().name == "polymetrics"
