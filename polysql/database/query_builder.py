"""Dialect-aware parameterized query builder."""

from typing import Any

from polysql.database.dialect import placeholder, quote_identifier, resolve_dialect
from polysql.database.params import DeleteParams, InsertParams, SelectParams, UpdateParams
from polysql.database.utils import (
    build_limit_clause,
    build_order_by_clause,
    build_where_clause,
    quote_columns,
    sorted_keys,
)
from polysql.database.validation import valid_column_name, valid_table_name
from polysql.exceptions import UnsafeMutationError
from polysql.types import Dialect, PredicateMap, StatementType


class QueryBuilder:
    """Builds SELECT/INSERT/UPDATE/DELETE statements for one dialect.

    Every method validates identifiers first and returns the SQL text with
    its positional arguments; nothing is executed here.
    """

    def __init__(self, dialect: Dialect | str) -> None:
        """Initialize query builder.

        Args:
            dialect: Target SQL dialect (member or name)
        """
        self.dialect = resolve_dialect(dialect)

    def _table(self, table: str) -> str:
        valid_table_name(table)
        return quote_identifier(self.dialect, table)

    def select(self, params: SelectParams) -> StatementType:
        """Build SELECT query.

        Args:
            params: Select request

        Returns:
            Tuple of (query, arguments)
        """
        table = self._table(params.table)
        cols = quote_columns(self.dialect, params.columns) if params.columns else "*"

        where_clause, args = build_where_clause(self.dialect, params.where, 1)
        query = f"SELECT {cols} FROM {table}{where_clause}"
        query += build_order_by_clause(self.dialect, params.order_by, params.desc)
        query += build_limit_clause(params.limit, params.offset)

        return query, args

    def insert(self, params: InsertParams) -> StatementType:
        """Build INSERT query.

        Columns are written in sorted order so identical inputs give identical
        SQL text.

        Args:
            params: Insert request

        Returns:
            Tuple of (query, arguments)

        Raises:
            UnsafeMutationError: If no values are given
        """
        table = self._table(params.table)
        if not params.values:
            raise UnsafeMutationError("insert requires non-empty values")

        columns = sorted_keys(params.values)
        placeholders = [placeholder(self.dialect, i) for i in range(1, len(columns) + 1)]

        query = (
            f"INSERT INTO {table} ({quote_columns(self.dialect, columns)}) "
            f"VALUES ({', '.join(placeholders)})"
        )
        return query, [params.values[col] for col in columns]

    def update(self, params: UpdateParams) -> StatementType:
        """Build UPDATE query.

        ``None`` in the SET map renders ``col = NULL`` without a bound value.

        Args:
            params: Update request

        Returns:
            Tuple of (query, arguments)

        Raises:
            UnsafeMutationError: If SET or WHERE is empty
        """
        table = self._table(params.table)
        if not params.set:
            raise UnsafeMutationError("update requires non-empty set")
        if not params.where:
            raise UnsafeMutationError(
                "update requires non-empty where (prevents full-table update)"
            )

        assignments: list[str] = []
        args: list[Any] = []
        for column in sorted_keys(params.set):
            valid_column_name(column)
            quoted = quote_identifier(self.dialect, column)
            value = params.set[column]
            if value is None:
                assignments.append(f"{quoted} = NULL")
            else:
                args.append(value)
                assignments.append(f"{quoted} = {placeholder(self.dialect, len(args))}")

        where_clause, where_args = build_where_clause(
            self.dialect, params.where, len(args) + 1
        )
        query = f"UPDATE {table} SET {', '.join(assignments)}{where_clause}"
        return query, args + where_args

    def delete(self, params: DeleteParams) -> StatementType:
        """Build DELETE query.

        Args:
            params: Delete request

        Returns:
            Tuple of (query, arguments)

        Raises:
            UnsafeMutationError: If WHERE is empty
        """
        table = self._table(params.table)
        if not params.where:
            raise UnsafeMutationError(
                "delete requires non-empty where (prevents full-table delete)"
            )

        where_clause, args = build_where_clause(self.dialect, params.where, 1)
        return f"DELETE FROM {table}{where_clause}", args

    def count(
        self, table: str, where: PredicateMap | None = None
    ) -> StatementType:
        """Build COUNT query.

        Args:
            table: Table name
            where: Optional predicate map

        Returns:
            Tuple of (query, arguments)
        """
        quoted = self._table(table)
        where_clause, args = build_where_clause(self.dialect, where, 1)
        return f"SELECT COUNT(*) FROM {quoted}{where_clause}", args

    def exists(
        self, table: str, where: PredicateMap | None = None
    ) -> StatementType:
        """Build an existence probe that stops at the first match.

        Args:
            table: Table name
            where: Optional predicate map

        Returns:
            Tuple of (query, arguments)
        """
        quoted = self._table(table)
        where_clause, args = build_where_clause(self.dialect, where, 1)
        return f"SELECT 1 FROM {quoted}{where_clause} LIMIT 1", args
