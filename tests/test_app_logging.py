"""Tests for logging configuration."""

import logging

from workout_tracker.app_logging import LOGGER_NAME, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    configure_logging()

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_updates_level() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging("debug")
    assert logger.level == logging.DEBUG

    configure_logging("warning")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1

    configure_logging()
