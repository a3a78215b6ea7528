"""
Tests for logging setup.
"""

import logging

import pytest

from devbootstrap.core.observability.logging_config import _parse_level, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    channels = logging.getLogger("devbootstrap.channel")
    saved = (list(root.handlers), root.level, channels.level)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    channels.setLevel(saved[2])


class TestSetupLogging:
    def test_default_level(self):
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_channel_level_opens_console_only(self):
        setup_logging(level="WARNING", channel_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert root.handlers[0].level == logging.DEBUG
        assert logging.getLogger("devbootstrap.channel").level == logging.DEBUG
        assert logging.getLogger("devbootstrap.channel.ext").isEnabledFor(logging.DEBUG)
        assert not logging.getLogger("devbootstrap.core").isEnabledFor(logging.DEBUG)

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(level="ERROR", log_file=str(log_file), log_file_level="INFO")
        logging.getLogger("devbootstrap.test").info("to file")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "to file" in log_file.read_text()
        assert logging.getLogger().level == logging.INFO


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("INFO") == logging.INFO

    def test_fallbacks(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("nonsense") == logging.WARNING
