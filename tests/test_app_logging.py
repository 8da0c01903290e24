"""Tests for logging configuration."""

import logging

from src.app_logging import LOGGER_NAME, configure_logging, get_logger


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_module_loggers_are_children() -> None:
    parent = logging.getLogger(LOGGER_NAME)
    logger = get_logger("src.activity_aggregator")

    assert logger.name == f"{LOGGER_NAME}.activity_aggregator"
    assert logger.parent is parent
