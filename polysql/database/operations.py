"""Entry points that build one statement and run it against a caller handle.

The handle is anything implementing ``execute`` and ``query`` (see
``DatabaseConnection``); an open transaction works the same as a connection.
Validation always happens before the handle is touched.
"""

from dataclasses import replace
from typing import Any

from polysql.database.interfaces import DatabaseConnection, RowCursor
from polysql.database.params import DeleteParams, InsertParams, SelectParams, UpdateParams
from polysql.database.query_builder import QueryBuilder
from polysql.database.schema import CreateIndexParams, TableDefinition
from polysql.database.schema_builder import SchemaBuilder
from polysql.database.utils import materialize_rows
from polysql.exceptions import ExecutionError
from polysql.log import get_logger
from polysql.types import Dialect, PredicateMap, Row

logger = get_logger(__name__)


def _execute(
    handle: DatabaseConnection,
    operation: str,
    target: str,
    query: str,
    args: list[Any],
) -> int:
    logger.debug(f"{operation} {target}: {query} ({len(args)} args)")
    try:
        return handle.execute(query, args)
    except Exception as e:
        logger.error(f"{operation} {target!r} failed: {e}")
        raise ExecutionError(operation, target, e) from e


def _query(
    handle: DatabaseConnection,
    operation: str,
    target: str,
    query: str,
    args: list[Any],
) -> RowCursor:
    logger.debug(f"{operation} {target}: {query} ({len(args)} args)")
    try:
        return handle.query(query, args)
    except Exception as e:
        logger.error(f"{operation} {target!r} failed: {e}")
        raise ExecutionError(operation, target, e) from e


# ----- DDL -----


def create_table(
    handle: DatabaseConnection, dialect: Dialect | str, definition: TableDefinition
) -> None:
    """Create a table and then each of its declared indexes.

    Args:
        handle: Execution handle
        dialect: Target SQL dialect
        definition: Table definition, validated as a whole first

    Raises:
        InvalidIdentifierError: If a name is unsafe
        InvalidColumnTypeError: If a column type is not portable
        SchemaInvariantError: If the definition breaks a structural rule
        ExecutionError: If the table or an index statement fails
    """
    builder = SchemaBuilder(dialect)
    query = builder.create_table_sql(definition)

    _execute(handle, "create table", definition.table, query, [])
    logger.info(f"Created table {definition.table} ({builder.dialect.value})")

    for params in builder.index_params(definition):
        create_index(handle, builder.dialect, params)


def create_index(
    handle: DatabaseConnection, dialect: Dialect | str, params: CreateIndexParams
) -> None:
    """Create an index named ``idx_<table>_<columns>``.

    On MySQL, which lacks IF NOT EXISTS for indexes, a duplicate-name failure
    counts as success when ``if_not_exists`` was requested.

    Args:
        handle: Execution handle
        dialect: Target SQL dialect
        params: Index request

    Raises:
        InvalidIdentifierError: If a name is unsafe
        SchemaInvariantError: If no columns are given
        ExecutionError: If the statement fails
    """
    builder = SchemaBuilder(dialect)
    name, query = builder.create_index_sql(params)

    logger.debug(f"create index {name}: {query}")
    try:
        handle.execute(query, [])
    except Exception as e:
        if builder.is_duplicate_index_error(params, e):
            logger.info(f"Index {name} already exists, skipping")
            return
        logger.error(f"create index {name!r} failed: {e}")
        raise ExecutionError("create index", name, e) from e


# ----- CRUD -----


def select(
    handle: DatabaseConnection, dialect: Dialect | str, params: SelectParams
) -> list[Row]:
    """Run a SELECT and return all rows.

    Args:
        handle: Execution handle
        dialect: Target SQL dialect
        params: Select request

    Returns:
        Rows as column-to-value dictionaries
    """
    query, args = QueryBuilder(dialect).select(params)
    cursor = _query(handle, "select", params.table, query, args)
    try:
        return materialize_rows(cursor)
    except Exception as e:
        logger.error(f"select {params.table!r} failed while reading rows: {e}")
        raise ExecutionError("select", params.table, e) from e


def select_rows(
    handle: DatabaseConnection, dialect: Dialect | str, params: SelectParams
) -> RowCursor:
    """Run a SELECT and return the raw cursor for streaming.

    The caller must close the returned cursor.
    """
    query, args = QueryBuilder(dialect).select(params)
    return _query(handle, "select", params.table, query, args)


def select_one(
    handle: DatabaseConnection, dialect: Dialect | str, params: SelectParams
) -> Row | None:
    """Run a SELECT limited to one row.

    Returns:
        The first matching row, or None when nothing matches
    """
    rows = select(handle, dialect, replace(params, limit=1))
    if not rows:
        return None
    return rows[0]


def insert(
    handle: DatabaseConnection, dialect: Dialect | str, params: InsertParams
) -> int:
    """Insert one row.

    Returns:
        Number of affected rows
    """
    query, args = QueryBuilder(dialect).insert(params)
    return _execute(handle, "insert", params.table, query, args)


def update(
    handle: DatabaseConnection, dialect: Dialect | str, params: UpdateParams
) -> int:
    """Update rows matching a non-empty predicate.

    Returns:
        Number of affected rows
    """
    query, args = QueryBuilder(dialect).update(params)
    return _execute(handle, "update", params.table, query, args)


def delete(
    handle: DatabaseConnection, dialect: Dialect | str, params: DeleteParams
) -> int:
    """Delete rows matching a non-empty predicate.

    Returns:
        Number of affected rows
    """
    query, args = QueryBuilder(dialect).delete(params)
    return _execute(handle, "delete", params.table, query, args)


def count(
    handle: DatabaseConnection,
    dialect: Dialect | str,
    table: str,
    where: PredicateMap | None = None,
) -> int:
    """Count rows matching the predicate (all rows when it is empty)."""
    query, args = QueryBuilder(dialect).count(table, where)
    with _query(handle, "count", table, query, args) as cursor:
        row = cursor.fetchone()
    if row is None:
        raise ExecutionError("count", table, RuntimeError("count query returned no rows"))
    return int(row[0])


def exists(
    handle: DatabaseConnection,
    dialect: Dialect | str,
    table: str,
    where: PredicateMap | None = None,
) -> bool:
    """Check whether at least one row matches the predicate."""
    query, args = QueryBuilder(dialect).exists(table, where)
    with _query(handle, "exists", table, query, args) as cursor:
        return cursor.fetchone() is not None
