"""Logger setup unit tests."""

import logging

import structlog
from unleash_repository import new_logger


def test_new_logger_json_format() -> None:
    """A JSON logger can be created."""
    logger = new_logger(level="INFO", format="json")
    assert logger is not None


def test_new_logger_text_format() -> None:
    """A console logger can be created and sets the package level."""
    new_logger(level="DEBUG", format="text")
    assert logging.getLogger("unleash_repository").level == logging.DEBUG


def test_new_logger_binds_context() -> None:
    """Keyword context is bound to the returned logger."""
    logger = new_logger(app_name="checkout-service")
    assert structlog.get_context(logger) == {"app_name": "checkout-service"}


def test_unknown_level_falls_back_to_info() -> None:
    """An unknown level name logs at INFO."""
    new_logger(level="chatty")
    assert logging.getLogger("unleash_repository").level == logging.INFO
