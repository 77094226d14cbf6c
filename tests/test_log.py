"""Unit tests for logging setup."""

import logging
import logging.handlers
from collections.abc import Generator
from pathlib import Path

import colorlog
import pytest

from polysql import (
    Settings,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
    setup_test_logging,
)


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Put the test logging configuration back afterwards."""
    yield
    setup_test_logging()


def test_setup_logging_defaults(restore_logging: None) -> None:
    """Test setup_logging with default parameters."""
    setup_logging()
    package_logger = logging.getLogger("polysql")

    assert package_logger.level == logging.INFO
    assert len(package_logger.handlers) == 1
    assert isinstance(package_logger.handlers[0].formatter, colorlog.ColoredFormatter)


def test_setup_logging_is_idempotent(restore_logging: None) -> None:
    """Repeated setup replaces handlers instead of stacking them."""
    setup_logging(level="DEBUG", use_colors=False)
    setup_logging(level="DEBUG", use_colors=False)
    package_logger = logging.getLogger("polysql")

    assert package_logger.level == logging.DEBUG
    assert len(package_logger.handlers) == 1
    assert not isinstance(
        package_logger.handlers[0].formatter, colorlog.ColoredFormatter
    )


def test_setup_logging_file(tmp_path: Path, restore_logging: None) -> None:
    """A log file gets every record in plain text."""
    log_file = tmp_path / "logs" / "polysql.log"
    setup_logging(level=logging.INFO, use_colors=False, log_file=log_file)

    get_logger("polysql.database.operations").info("Created table widgets (sqlite)")
    for handler in logging.getLogger("polysql").handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "Created table widgets (sqlite)" in content
    assert "INFO" in content


def test_setup_logging_from_settings(tmp_path: Path, restore_logging: None) -> None:
    """Settings drive level, colors and the log file."""
    settings = Settings(
        log_level="warning", log_colors=False, log_file=tmp_path / "polysql.log"
    )
    setup_logging_from_settings(settings)
    package_logger = logging.getLogger("polysql")

    assert package_logger.level == logging.WARNING
    assert len(package_logger.handlers) == 2
    assert any(
        isinstance(handler, logging.handlers.RotatingFileHandler)
        for handler in package_logger.handlers
    )


def test_root_logger_untouched(restore_logging: None) -> None:
    """Only the package logger is configured."""
    root_handlers = list(logging.getLogger().handlers)
    setup_logging(level=logging.WARNING)
    assert logging.getLogger().handlers == root_handlers


def test_get_logger() -> None:
    """Test get_logger returns a logger instance."""
    logger = get_logger("polysql.test")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "polysql.test"
