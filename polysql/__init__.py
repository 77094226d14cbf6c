"""Injection-safe SQL builders for SQLite, MySQL and PostgreSQL."""

from .config import Settings, get_settings, load_settings
from .exceptions import (
    ExecutionError,
    InvalidColumnTypeError,
    InvalidIdentifierError,
    PolySQLError,
    SchemaInvariantError,
    UnsafeMutationError,
)
from .log import (
    get_logger,
    setup_logging,
    setup_logging_from_settings,
    setup_test_logging,
)
from .types import ColumnType, Dialect, Environment, OnDeleteAction

__version__ = "0.1.0"

__all__ = [
    "ColumnType",
    "Dialect",
    "Environment",
    "OnDeleteAction",
    "Settings",
    "get_settings",
    "load_settings",
    "get_logger",
    "setup_logging",
    "setup_logging_from_settings",
    "setup_test_logging",
    "PolySQLError",
    "InvalidIdentifierError",
    "InvalidColumnTypeError",
    "SchemaInvariantError",
    "UnsafeMutationError",
    "ExecutionError",
]
