"""Execution seam between the builders and a database client."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from types import TracebackType
from typing import Any

from polysql.log import get_logger
from polysql.types import DatabaseParamType

logger = get_logger(__name__)


class RowCursor:
    """Result of a query: column names once, then rows in order."""

    def __init__(
        self,
        columns: Sequence[str],
        rows: Iterable[Sequence[Any]],
        close: Callable[[], None] | None = None,
    ) -> None:
        """Initialize row cursor.

        Args:
            columns: Result column names in select order
            rows: Iterable of row value sequences aligned with ``columns``
            close: Optional callback releasing the underlying cursor
        """
        self._columns = list(columns)
        self._rows = iter(rows)
        self._close = close
        self._closed = False

    @property
    def columns(self) -> list[str]:
        """Result column names."""
        return list(self._columns)

    def __iter__(self) -> Iterator[Sequence[Any]]:
        return self._rows

    def fetchone(self) -> Sequence[Any] | None:
        """Return the next row or None when exhausted."""
        return next(self._rows, None)

    def close(self) -> None:
        """Release the underlying cursor. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        if self._close is not None:
            self._close()

    def __enter__(self) -> "RowCursor":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class DatabaseConnection(ABC):
    """Abstract execution handle.

    Anything offering ``execute`` and ``query`` with these shapes can be
    passed to the entry points, including an open transaction.
    """

    @abstractmethod
    def execute(self, query: str, params: DatabaseParamType = None) -> int:
        """Execute a statement.

        Args:
            query: SQL statement
            params: Positional parameters

        Returns:
            Number of affected rows (driver-reported, may be -1 for DDL)
        """
        pass

    @abstractmethod
    def query(self, query: str, params: DatabaseParamType = None) -> RowCursor:
        """Run a query.

        Args:
            query: SQL query
            params: Positional parameters

        Returns:
            Cursor over the result rows
        """
        pass


class DatabaseTransaction(DatabaseConnection):
    """Transaction handle that commits on clean exit and rolls back on error."""

    @abstractmethod
    def commit(self) -> None:
        """Commit the transaction."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Rollback the transaction."""
        pass

    def __enter__(self) -> "DatabaseTransaction":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.commit()
        else:
            logger.warning(f"Rolling back transaction after {exc_type.__name__}")
            self.rollback()
