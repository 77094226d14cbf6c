"""SQLAlchemy execution handle for MySQL and PostgreSQL drivers.

Builders emit ``?`` or ``$n`` placeholders. DB-API drivers disagree on
paramstyle (pymysql and psycopg use ``%s``), so statements are rewritten into
``text()`` clauses with named binds and SQLAlchemy renders the driver's style.
"""

import itertools
import re
from collections.abc import Sequence
from types import TracebackType
from typing import Any

from sqlalchemy import TextClause, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from polysql.database.interfaces import (
    DatabaseConnection,
    DatabaseTransaction,
    RowCursor,
)
from polysql.log import get_logger
from polysql.types import DatabaseParamType

logger = get_logger(__name__)

_PLACEHOLDER_PATTERN = re.compile(r"\?|\$(\d+)")


def to_text_clause(
    query: str, params: Sequence[Any] | None = None
) -> tuple[TextClause, dict[str, Any]]:
    """Convert a positional statement into a text clause with named binds.

    Identifiers are validated to ``[A-Za-z0-9_]`` and values are always bound,
    so ``?`` and ``$n`` only occur as placeholders whenever parameters are
    given. Statements without parameters (DDL) are passed through untouched
    apart from escaping colons inside default literals.

    Args:
        query: Statement using ``?`` or ``$n`` placeholders
        params: Positional parameter values

    Returns:
        Tuple of (text clause, bind parameter dict)

    Example:
        >>> to_text_clause('SELECT * FROM "t" WHERE "a" = $1', ["x"])
        (<TextClause 'SELECT * FROM "t" WHERE "a" = :p1'>, {"p1": "x"})
    """
    escaped = query.replace(":", "\\:")
    if not params:
        return text(escaped), {}

    counter = itertools.count(1)

    def _named(match: re.Match[str]) -> str:
        index = int(match.group(1)) if match.group(1) else next(counter)
        return f":p{index}"

    statement = _PLACEHOLDER_PATTERN.sub(_named, escaped)
    binds = {f"p{i}": value for i, value in enumerate(params, start=1)}
    return text(statement), binds


class SQLAlchemyConnection(DatabaseConnection):
    """Execution handle over an SQLAlchemy connection.

    Outside ``transaction()`` every ``execute`` commits immediately and closing
    a read cursor ends the transaction the read began.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize SQLAlchemy connection.

        Args:
            engine: Engine to open connections from
        """
        self.engine = engine
        self._connection: Connection | None = None
        self._transaction: "SQLAlchemyTransaction | None" = None

    def connect(self) -> None:
        """Open a connection from the engine."""
        try:
            self._connection = self.engine.connect()
            logger.info(f"Connected to {self.engine.url.get_backend_name()} database")
        except SQLAlchemyError as e:
            logger.error(f"Failed to connect: {e}")
            raise

    def disconnect(self) -> None:
        """Close the connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("Disconnected from database")

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connection is not None

    @property
    def backend_name(self) -> str:
        """SQLAlchemy backend name (sqlite, mysql, postgresql)."""
        return self.engine.url.get_backend_name()

    @property
    def in_transaction(self) -> bool:
        """Check if the connection holds a transaction, explicit or autobegun."""
        return self._connection is not None and self._connection.in_transaction()

    def _require_connection(self) -> Connection:
        if self._connection is None:
            raise RuntimeError("Database not connected")
        return self._connection

    def execute(self, query: str, params: DatabaseParamType = None) -> int:
        """Execute a statement.

        Args:
            query: SQL statement
            params: Positional parameters

        Returns:
            Number of affected rows
        """
        connection = self._require_connection()
        statement, binds = to_text_clause(query, params)
        try:
            result = connection.execute(statement, binds)
            rowcount = result.rowcount
            result.close()
            if self._transaction is None:
                connection.commit()
            return rowcount
        except SQLAlchemyError as e:
            logger.error(f"Query execution failed: {e}")
            if self._transaction is None:
                connection.rollback()
            raise

    def query(self, query: str, params: DatabaseParamType = None) -> RowCursor:
        """Run a query.

        Args:
            query: SQL query
            params: Positional parameters

        Returns:
            Cursor over the result rows
        """
        connection = self._require_connection()
        statement, binds = to_text_clause(query, params)
        try:
            result = connection.execute(statement, binds)
        except SQLAlchemyError as e:
            logger.error(f"Query failed: {e}")
            if self._transaction is None:
                connection.rollback()
            raise
        columns = list(result.keys()) if result.returns_rows else []

        def _close() -> None:
            result.close()
            # Reads outside transaction() end their autobegun transaction
            if (
                self._transaction is None
                and self._connection is connection
                and connection.in_transaction()
            ):
                connection.commit()

        return RowCursor(columns, result, close=_close)

    def transaction(self) -> "SQLAlchemyTransaction":
        """Begin an explicit transaction.

        Returns:
            Transaction handle usable as a context manager
        """
        connection = self._require_connection()
        if self._transaction is not None:
            raise RuntimeError("Transaction already in progress")
        # A read cursor that was never closed still holds its transaction
        if connection.in_transaction():
            connection.commit()
        self._transaction = SQLAlchemyTransaction(self, connection.begin())
        return self._transaction

    def _release_transaction(self) -> None:
        self._transaction = None

    def __enter__(self) -> "SQLAlchemyConnection":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disconnect()


class SQLAlchemyTransaction(DatabaseTransaction):
    """Transaction handle over an SQLAlchemy root transaction."""

    def __init__(self, connection: SQLAlchemyConnection, transaction: Any) -> None:
        """Initialize transaction.

        Args:
            connection: Owning connection handle
            transaction: SQLAlchemy ``RootTransaction``
        """
        self._connection = connection
        self._transaction = transaction

    def execute(self, query: str, params: DatabaseParamType = None) -> int:
        """Execute a statement inside the transaction."""
        return self._connection.execute(query, params)

    def query(self, query: str, params: DatabaseParamType = None) -> RowCursor:
        """Run a query inside the transaction."""
        return self._connection.query(query, params)

    def commit(self) -> None:
        """Commit the transaction."""
        try:
            if self._transaction.is_active:
                self._transaction.commit()
        finally:
            self._connection._release_transaction()

    def rollback(self) -> None:
        """Rollback the transaction."""
        try:
            if self._transaction.is_active:
                self._transaction.rollback()
        finally:
            self._connection._release_transaction()
