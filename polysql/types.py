"""Common type definitions for the polysql package."""

from enum import Enum
from typing import Any, TypeAlias

DatabaseParamType: TypeAlias = list[Any] | tuple[Any, ...] | None
PredicateMap: TypeAlias = dict[str, Any]
Row: TypeAlias = dict[str, Any]
StatementType: TypeAlias = tuple[str, list[Any]]


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Dialect(str, Enum):
    """Supported SQL dialects."""

    SQLITE = "sqlite"
    MYSQL = "mysql"
    POSTGRES = "postgres"


class ColumnType(str, Enum):
    """Portable column types understood by every dialect."""

    TEXT = "text"
    INTEGER = "integer"
    REAL = "real"
    BLOB = "blob"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    JSON = "json"


class OnDeleteAction(str, Enum):
    """Allowed ON DELETE actions for foreign keys."""

    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    RESTRICT = "RESTRICT"
