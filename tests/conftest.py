"""Global pytest configuration and fixtures."""

from collections.abc import Generator, Sequence
from logging import Logger
from typing import Any

import pytest

from polysql import setup_test_logging
from polysql.database import (
    ColumnDefinition,
    DatabaseConnection,
    IndexDefinition,
    RowCursor,
    SQLiteConnection,
    TableDefinition,
)
from polysql.types import ColumnType, DatabaseParamType


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    from polysql import get_logger

    return get_logger("test")


class RecordingConnection(DatabaseConnection):
    """In-memory handle that records statements instead of running them.

    ``rows``/``columns`` feed every ``query`` call; ``error`` makes every call
    raise it.
    """

    def __init__(
        self,
        columns: Sequence[str] = (),
        rows: Sequence[Sequence[Any]] = (),
        error: BaseException | None = None,
    ) -> None:
        self.columns = list(columns)
        self.rows = [tuple(row) for row in rows]
        self.error = error
        self.calls: list[tuple[str, str, list[Any]]] = []
        self.closed_cursors = 0

    def execute(self, query: str, params: DatabaseParamType = None) -> int:
        self.calls.append(("execute", query, list(params or [])))
        if self.error is not None:
            raise self.error
        return 1

    def query(self, query: str, params: DatabaseParamType = None) -> RowCursor:
        self.calls.append(("query", query, list(params or [])))
        if self.error is not None:
            raise self.error

        def _close() -> None:
            self.closed_cursors += 1

        return RowCursor(self.columns, list(self.rows), close=_close)

    @property
    def statements(self) -> list[str]:
        """SQL text of every recorded call."""
        return [query for _, query, _ in self.calls]


@pytest.fixture
def recording_connection() -> RecordingConnection:
    """Provide a recording handle with no result rows."""
    return RecordingConnection()


@pytest.fixture
def sqlite_connection() -> Generator[SQLiteConnection, None, None]:
    """Provide a connected in-memory SQLite handle."""
    with SQLiteConnection() as connection:
        yield connection


@pytest.fixture
def widgets_definition() -> TableDefinition:
    """Table with a text primary key, a default and an index."""
    return TableDefinition(
        table="widgets",
        columns=[
            ColumnDefinition(
                name="id", type=ColumnType.TEXT, primary_key=True, not_null=True
            ),
            ColumnDefinition(name="name", type="text", not_null=True),
            ColumnDefinition(name="count", type="integer", not_null=True, default="0"),
            ColumnDefinition(name="sku", type="text", unique=True),
        ],
        indexes=[IndexDefinition(columns=["name"])],
        if_not_exists=True,
    )


@pytest.fixture
def make_recording_connection() -> Any:
    """Factory for recording handles with canned rows or a canned error."""

    def _make(
        columns: Sequence[str] = (),
        rows: Sequence[Sequence[Any]] = (),
        error: BaseException | None = None,
    ) -> RecordingConnection:
        return RecordingConnection(columns=columns, rows=rows, error=error)

    return _make
