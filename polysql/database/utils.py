"""Clause builders and row helpers shared by the query and schema builders."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from polysql.constants import MAX_SELECT_LIMIT
from polysql.database.dialect import placeholder, quote_identifier
from polysql.database.interfaces import RowCursor
from polysql.database.validation import valid_column_name
from polysql.types import Dialect, PredicateMap, Row


def sorted_keys(mapping: Mapping[str, Any]) -> list[str]:
    """Return mapping keys in alphabetical order for reproducible SQL."""
    return sorted(mapping.keys())


def escape_single_quotes(value: str) -> str:
    """Double single quotes for embedding in a SQL string literal."""
    return value.replace("'", "''")


def escape_string_literal(dialect: Dialect, value: str) -> str:
    """Escape text for a single-quoted SQL literal in the given dialect.

    MySQL treats backslash as an escape character inside string literals
    (unless NO_BACKSLASH_ESCAPES is set), so backslashes are doubled there
    before quotes are.
    """
    if dialect == Dialect.MYSQL:
        value = value.replace("\\", "\\\\")
    return escape_single_quotes(value)


def quote_columns(dialect: Dialect, columns: Iterable[str]) -> str:
    """Validate and quote a column list.

    Args:
        dialect: Target dialect
        columns: Column names

    Returns:
        Comma-separated quoted column list
    """
    quoted: list[str] = []
    for column in columns:
        valid_column_name(column)
        quoted.append(quote_identifier(dialect, column))
    return ", ".join(quoted)


def build_where_clause(
    dialect: Dialect, where: PredicateMap | None, start_index: int = 1
) -> tuple[str, list[Any]]:
    """Build WHERE clause from a predicate map.

    Conditions are joined with AND in sorted key order. ``None`` values render
    ``IS NULL`` and bind nothing. Placeholders are numbered from
    ``start_index`` so PostgreSQL statements stay consistent when the clause
    follows other bound values.

    Args:
        dialect: Target dialect
        where: Column to value mapping
        start_index: 1-based index of the first placeholder

    Returns:
        Tuple of (where_clause, arguments); the clause starts with a space

    Example:
        >>> build_where_clause(Dialect.POSTGRES, {"name": "John", "age": 30}, 2)
        (' WHERE "age" = $2 AND "name" = $3', [30, "John"])
    """
    if not where:
        return "", []

    conditions: list[str] = []
    args: list[Any] = []
    index = start_index

    for column in sorted_keys(where):
        valid_column_name(column)
        quoted = quote_identifier(dialect, column)
        value = where[column]
        if value is None:
            conditions.append(f"{quoted} IS NULL")
        else:
            conditions.append(f"{quoted} = {placeholder(dialect, index)}")
            args.append(value)
            index += 1

    return f" WHERE {' AND '.join(conditions)}", args


def build_order_by_clause(dialect: Dialect, column: str | None, desc: bool = False) -> str:
    """Build single-column ORDER BY clause.

    Example:
        >>> build_order_by_clause(Dialect.MYSQL, "created_at", desc=True)
        ' ORDER BY `created_at` DESC'
    """
    if not column:
        return ""

    valid_column_name(column)
    direction = "DESC" if desc else "ASC"
    return f" ORDER BY {quote_identifier(dialect, column)} {direction}"


def resolve_limit(limit: int | None) -> int | None:
    """Apply the SELECT row cap.

    Returns:
        Effective limit, or None when LIMIT must be omitted
    """
    if not limit:
        return MAX_SELECT_LIMIT
    if limit < 0:
        return None
    return min(limit, MAX_SELECT_LIMIT)


def build_limit_clause(limit: int | None, offset: int | None = None) -> str:
    """Build LIMIT clause with optional OFFSET.

    Example:
        >>> build_limit_clause(999999, 20)
        ' LIMIT 10000 OFFSET 20'
    """
    clause = ""
    effective = resolve_limit(limit)
    if effective is not None:
        clause += f" LIMIT {int(effective)}"
    if offset and offset > 0:
        clause += f" OFFSET {int(offset)}"
    return clause


def decode_value(value: Any) -> Any:
    """Decode a driver cell into a plain scalar."""
    if isinstance(value, (memoryview, bytearray)):
        return bytes(value)
    return value


def row_to_dict(columns: Sequence[str], row: Sequence[Any]) -> Row:
    """Pair column names with row values, keeping column order."""
    return {column: decode_value(value) for column, value in zip(columns, row)}


def materialize_rows(cursor: RowCursor) -> list[Row]:
    """Read every row of a cursor into dictionaries and close it.

    Args:
        cursor: Query result cursor

    Returns:
        List of rows as column-to-value dictionaries
    """
    with cursor:
        columns = cursor.columns
        return [row_to_dict(columns, row) for row in cursor]
