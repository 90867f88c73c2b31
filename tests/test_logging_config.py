"""Tests for logging setup."""

from __future__ import annotations

import logging

import pytest

from utils.logging_config import APP_LOGGER_NAME, setup_logging


def test_setup_logging_levels() -> None:
    logger = setup_logging("debug")

    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("mutagen").level == logging.WARNING


def test_console_handler_replaces_existing_handlers() -> None:
    _ = setup_logging("INFO")
    _ = setup_logging("INFO")

    assert len(logging.getLogger().handlers) == 1


def test_invalid_level() -> None:
    with pytest.raises(ValueError, match="Invalid log level"):
        _ = setup_logging("LOUD")
