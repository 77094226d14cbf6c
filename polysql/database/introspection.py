"""Live-schema introspection and drift detection against table definitions."""

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, Field

from polysql.database.dialect import quote_identifier, resolve_dialect
from polysql.database.interfaces import DatabaseConnection
from polysql.database.schema import TableDefinition
from polysql.database.validation import valid_table_name
from polysql.exceptions import ExecutionError
from polysql.log import get_logger
from polysql.types import Dialect

logger = get_logger(__name__)

_MYSQL_COLUMNS_QUERY = (
    "SELECT COLUMN_NAME FROM information_schema.COLUMNS "
    "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = ? ORDER BY ORDINAL_POSITION"
)
_POSTGRES_COLUMNS_QUERY = (
    "SELECT column_name FROM information_schema.columns "
    "WHERE table_schema = 'public' AND table_name = $1 ORDER BY ordinal_position"
)


class DriftEntry(BaseModel):
    """A column that differs between a definition and the live table."""

    table: str = Field(..., description="Table name")
    kind: Literal["missing", "extra"] = Field(
        ..., description="missing: defined but absent; extra: present but undefined"
    )
    column: str = Field(..., description="Column name that differs")


def table_columns(
    handle: DatabaseConnection, dialect: Dialect | str, table: str
) -> list[str]:
    """Read the column names of a live table in database order.

    Args:
        handle: Execution handle
        dialect: Target SQL dialect
        table: Table name

    Returns:
        Column names; empty if the table does not exist
    """
    dialect = resolve_dialect(dialect)
    valid_table_name(table)

    if dialect == Dialect.MYSQL:
        query, args, name_index = _MYSQL_COLUMNS_QUERY, [table], 0
    elif dialect == Dialect.POSTGRES:
        query, args, name_index = _POSTGRES_COLUMNS_QUERY, [table], 0
    else:
        # PRAGMA takes no parameters; the name is validated above.
        # table_info rows: cid, name, type, notnull, dflt_value, pk
        query = f"PRAGMA table_info({quote_identifier(dialect, table)})"
        args, name_index = [], 1

    try:
        with handle.query(query, args) as cursor:
            return [str(row[name_index]) for row in cursor]
    except Exception as e:
        logger.error(f"introspecting table {table!r} failed: {e}")
        raise ExecutionError("introspect table", table, e) from e


def check_schema_drift(
    table: str, expected: Sequence[str], actual: Sequence[str]
) -> list[DriftEntry]:
    """Compare defined column names with live column names.

    Args:
        table: Table name used in the entries
        expected: Column names from the definition
        actual: Column names read from the database

    Returns:
        Missing entries (in expected order) followed by extra entries
        (in actual order)
    """
    expected_set = set(expected)
    actual_set = set(actual)

    drifts = [
        DriftEntry(table=table, kind="missing", column=col)
        for col in expected
        if col not in actual_set
    ]
    drifts.extend(
        DriftEntry(table=table, kind="extra", column=col)
        for col in actual
        if col not in expected_set
    )

    if drifts:
        missing = [d.column for d in drifts if d.kind == "missing"]
        extra = [d.column for d in drifts if d.kind == "extra"]
        logger.warning(
            f"Table {table!r} has schema drift: "
            f"missing=[{', '.join(missing)}] extra=[{', '.join(extra)}]"
        )

    return drifts


def detect_schema_drift(
    handle: DatabaseConnection, dialect: Dialect | str, definition: TableDefinition
) -> list[DriftEntry]:
    """Compare a table definition with the table as it exists in the database."""
    actual = table_columns(handle, dialect, definition.table)
    return check_schema_drift(definition.table, definition.column_names, actual)
