"""Logging configuration for Finboard.

All CLI output goes through the "finboard" logger. The console shows plain
messages for INFO and below, and tags warnings (budget alerts) and errors so
they stand out in a report. The log file keeps timestamps and levels for
every record.
"""

import logging
from datetime import date
from config import Config

LOGGER_NAME = "finboard"


class ConsoleFormatter(logging.Formatter):
    """Bare messages for routine output, level-tagged ones for problems."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"✗ {message}"
        if record.levelno >= logging.WARNING:
            return f"⚠ {message}"
        return message


def setup_logging(config: Config) -> logging.Logger:
    """Attach a dated file handler and a console handler to the app logger.

    Safe to call more than once; existing handlers are replaced.

    Args:
        config: Application configuration containing log settings.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)
    logger.handlers.clear()

    file_handler = logging.FileHandler(
        config.log_dir / f"finboard-{date.today().isoformat()}.log"
    )
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    # Engine debug records (division guards) only go to the file
    console_handler.setLevel(max(logging.INFO, logging.getLevelName(config.log_level)))
    console_handler.setFormatter(ConsoleFormatter("%(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)
