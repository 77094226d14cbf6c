"""Logging configuration for polysql."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import colorlog

if TYPE_CHECKING:
    from .config import Settings

PACKAGE_LOGGER = "polysql"

BASE_LOG_FORMAT = (
    "%(asctime)s %(levelname)8s %(message)s (%(name)s@%(filename)s:%(lineno)d)"
)
COLOR_LOG_FORMAT = (
    "%(asctime)s %(log_color)s%(levelname)8s%(reset)s %(message)s "
    "\033[90m(%(name)s@%(filename)s:%(lineno)d)\033[0m"
)
DATE_FORMAT = "%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logging(
    level: int | str = logging.INFO,
    use_colors: bool = True,
    log_file: Path | None = None,
) -> None:
    """Configure the polysql logger hierarchy.

    Only the ``polysql`` logger is touched so that embedding applications keep
    control of the root logger.

    Args:
        level: Logging level (int or level name)
        use_colors: Whether to colorize console output
        log_file: Optional path of a rotating log file
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.addHandler(_create_console_handler(use_colors))
    if log_file is not None:
        package_logger.addHandler(_create_file_handler(log_file))


def _create_console_handler(use_colors: bool) -> logging.Handler:
    """Create console handler with appropriate formatter."""
    console_handler = logging.StreamHandler(sys.stdout)

    formatter: logging.Formatter
    if use_colors:
        formatter = colorlog.ColoredFormatter(
            COLOR_LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS,
            style="%",
        )
    else:
        formatter = logging.Formatter(BASE_LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler.setFormatter(formatter)
    return console_handler


def _create_file_handler(log_file: Path) -> logging.Handler:
    """Create a size-rotated file handler."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=4,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(BASE_LOG_FORMAT, datefmt=DATE_FORMAT))
    return file_handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_test_logging(level: int = logging.DEBUG) -> None:
    """Setup plain-text debug logging for test runs.

    Args:
        level: Logging level to use
    """
    setup_logging(level=level, use_colors=False)


def setup_logging_from_settings(settings: "Settings") -> None:
    """Configure logging from runtime settings.

    Args:
        settings: Settings providing level, colors and optional log file
    """
    setup_logging(
        level=settings.log_level,
        use_colors=settings.log_colors,
        log_file=settings.log_file,
    )
