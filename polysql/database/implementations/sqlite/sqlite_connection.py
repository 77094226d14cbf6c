"""SQLite execution handle over the standard library driver."""

import sqlite3
from pathlib import Path
from types import TracebackType

from polysql.database.interfaces import (
    DatabaseConnection,
    DatabaseTransaction,
    RowCursor,
)
from polysql.log import get_logger
from polysql.types import DatabaseParamType

logger = get_logger(__name__)

MEMORY_DATABASE = ":memory:"


class SQLiteConnection(DatabaseConnection):
    """SQLite database connection implementation.

    The driver runs in autocommit mode; ``transaction()`` opens an explicit
    BEGIN/COMMIT block whose handle satisfies the same execution seam.
    """

    def __init__(self, db_path: str | Path = MEMORY_DATABASE) -> None:
        """Initialize SQLite connection.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None
        self._in_transaction = False

    def connect(self) -> None:
        """Establish SQLite database connection."""
        try:
            if str(self.db_path) != MEMORY_DATABASE:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=30.0,
                isolation_level=None,
            )
            self._configure_connection()
            logger.info(f"Connected to SQLite: {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Failed to connect to SQLite database: {e}")
            raise

    def disconnect(self) -> None:
        """Close SQLite database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("Disconnected from SQLite")

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connection is not None

    @property
    def in_transaction(self) -> bool:
        """Check if an explicit transaction is open."""
        return self._in_transaction

    def _require_connection(self) -> sqlite3.Connection:
        if not self._connection:
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
        try:
            cursor = connection.execute(query, tuple(params or ()))
            try:
                return cursor.rowcount
            finally:
                cursor.close()
        except sqlite3.Error as e:
            logger.error(f"Query execution failed: {e}")
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
        try:
            cursor = connection.execute(query, tuple(params or ()))
        except sqlite3.Error as e:
            logger.error(f"Query failed: {e}")
            raise
        columns = [description[0] for description in cursor.description or ()]
        return RowCursor(columns, cursor, close=cursor.close)

    def transaction(self) -> "SQLiteTransaction":
        """Begin an explicit transaction.

        Returns:
            Transaction handle usable as a context manager
        """
        connection = self._require_connection()
        if self._in_transaction:
            raise RuntimeError("Transaction already in progress")
        connection.execute("BEGIN")
        self._in_transaction = True
        return SQLiteTransaction(self)

    def _end_transaction(self, statement: str) -> None:
        connection = self._require_connection()
        try:
            connection.execute(statement)
        finally:
            self._in_transaction = False

    def _configure_connection(self) -> None:
        """Configure SQLite connection settings."""
        if not self._connection:
            return

        # Enforce FOREIGN KEY ... ON DELETE clauses
        self._connection.execute("PRAGMA foreign_keys = ON")
        self._connection.execute("PRAGMA busy_timeout = 30000")

    def __enter__(self) -> "SQLiteConnection":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disconnect()


class SQLiteTransaction(DatabaseTransaction):
    """SQLite transaction handle."""

    def __init__(self, connection: SQLiteConnection) -> None:
        """Initialize SQLite transaction.

        Args:
            connection: Connection that opened the transaction
        """
        self._connection = connection
        self._finished = False

    def execute(self, query: str, params: DatabaseParamType = None) -> int:
        """Execute a statement inside the transaction."""
        self._check_active()
        return self._connection.execute(query, params)

    def query(self, query: str, params: DatabaseParamType = None) -> RowCursor:
        """Run a query inside the transaction."""
        self._check_active()
        return self._connection.query(query, params)

    def commit(self) -> None:
        """Commit the transaction."""
        if not self._finished:
            self._finished = True
            self._connection._end_transaction("COMMIT")

    def rollback(self) -> None:
        """Rollback the transaction."""
        if not self._finished:
            self._finished = True
            self._connection._end_transaction("ROLLBACK")

    def _check_active(self) -> None:
        if self._finished:
            raise RuntimeError("Transaction already finished")
