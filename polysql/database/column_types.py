"""Portable column types and their per-dialect SQL keywords."""

from polysql.exceptions import InvalidColumnTypeError
from polysql.types import ColumnType, Dialect

_TYPE_MAP: dict[Dialect, dict[ColumnType, str]] = {
    Dialect.SQLITE: {
        ColumnType.TEXT: "TEXT",
        ColumnType.INTEGER: "INTEGER",
        ColumnType.REAL: "REAL",
        ColumnType.BLOB: "BLOB",
        ColumnType.BOOLEAN: "INTEGER",
        ColumnType.TIMESTAMP: "TEXT",
        ColumnType.JSON: "TEXT",
    },
    Dialect.MYSQL: {
        ColumnType.TEXT: "TEXT",
        ColumnType.INTEGER: "INT",
        ColumnType.REAL: "DOUBLE",
        ColumnType.BLOB: "BLOB",
        ColumnType.BOOLEAN: "TINYINT(1)",
        ColumnType.TIMESTAMP: "TIMESTAMP",
        ColumnType.JSON: "JSON",
    },
    Dialect.POSTGRES: {
        ColumnType.TEXT: "TEXT",
        ColumnType.INTEGER: "INTEGER",
        ColumnType.REAL: "DOUBLE PRECISION",
        ColumnType.BLOB: "BYTEA",
        ColumnType.BOOLEAN: "BOOLEAN",
        ColumnType.TIMESTAMP: "TIMESTAMP",
        ColumnType.JSON: "JSONB",
    },
}

VALID_COLUMN_TYPES: tuple[str, ...] = tuple(t.value for t in ColumnType)


def validate_column_type(value: str | ColumnType) -> ColumnType:
    """Validate a column type name.

    Args:
        value: Lower-case type name or ColumnType member

    Returns:
        The matching ColumnType

    Raises:
        InvalidColumnTypeError: If the value is not a portable type
    """
    if isinstance(value, ColumnType):
        return value
    if isinstance(value, str) and value in VALID_COLUMN_TYPES:
        return ColumnType(value)
    raise InvalidColumnTypeError(
        f"invalid column type {value!r}: must be one of "
        f"{', '.join(VALID_COLUMN_TYPES)}"
    )


def sql_type(dialect: Dialect | str, column_type: ColumnType | str) -> str:
    """Return the concrete SQL type keyword for a dialect.

    Unknown dialects use the SQLite mapping and unknown types are returned
    verbatim, so unvalidated input degrades instead of failing mid-statement.

    Args:
        dialect: Target dialect
        column_type: Portable column type

    Returns:
        Dialect-specific type keyword
    """
    type_map = _TYPE_MAP.get(dialect, _TYPE_MAP[Dialect.SQLITE])  # type: ignore[call-overload]
    name = column_type.value if isinstance(column_type, ColumnType) else column_type
    if name in VALID_COLUMN_TYPES:
        return type_map[ColumnType(name)]
    return str(name)
