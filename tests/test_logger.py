"""Tests for logging setup."""

import logging

import pytest

from logger import ConsoleFormatter, get_logger, setup_logging


@pytest.fixture
def configured_logger(test_config):
    logger = setup_logging(test_config)
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


class TestSetupLogging:
    def test_handlers_replaced_on_repeat(self, test_config, configured_logger):
        setup_logging(test_config)

        assert len(get_logger().handlers) == 2

    def test_writes_dated_log_file(self, test_config, configured_logger):
        configured_logger.info("hello")
        for handler in configured_logger.handlers:
            handler.flush()

        (log_file,) = test_config.log_dir.glob("finboard-*.log")
        assert "INFO - hello" in log_file.read_text()

    def test_console_skips_debug(self, configured_logger):
        console = [
            h for h in configured_logger.handlers if isinstance(h.formatter, ConsoleFormatter)
        ]
        assert console[0].level == logging.INFO


class TestConsoleFormatter:
    @pytest.mark.parametrize(
        "level,expected",
        [
            (logging.INFO, "over budget"),
            (logging.WARNING, "⚠ over budget"),
            (logging.ERROR, "✗ over budget"),
        ],
    )
    def test_level_tags(self, level, expected):
        record = logging.LogRecord("finboard", level, __file__, 1, "over budget", None, None)

        assert ConsoleFormatter("%(message)s").format(record) == expected
