"""Tests for dialect primitives, identifier validation and column types."""

import pytest

from polysql.database import (
    dialect_from_name,
    is_valid_identifier,
    placeholder,
    quote_identifier,
    resolve_dialect,
    sql_type,
    valid_column_name,
    valid_table_name,
    validate_column_type,
)
from polysql.exceptions import InvalidColumnTypeError, InvalidIdentifierError
from polysql.types import ColumnType, Dialect


class TestDialectPrimitives:
    """Test dialect lookup, quoting and placeholders."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("mysql", Dialect.MYSQL),
            ("postgres", Dialect.POSTGRES),
            ("postgresql", Dialect.POSTGRES),
            ("sqlite", Dialect.SQLITE),
            ("sqlite3", Dialect.SQLITE),
            ("oracle", Dialect.SQLITE),
            ("", Dialect.SQLITE),
            (None, Dialect.SQLITE),
        ],
    )
    def test_dialect_from_name(self, name: str | None, expected: Dialect) -> None:
        """Unknown and empty names fall back to SQLite."""
        assert dialect_from_name(name) == expected

    def test_resolve_dialect(self) -> None:
        """Members pass through and names resolve like configuration."""
        assert resolve_dialect(Dialect.MYSQL) is Dialect.MYSQL
        assert resolve_dialect("mysql") is Dialect.MYSQL
        assert resolve_dialect("postgresql") is Dialect.POSTGRES
        assert resolve_dialect("oracle") is Dialect.SQLITE
        assert resolve_dialect(None) is Dialect.SQLITE

    def test_quote_identifier(self) -> None:
        """MySQL uses backticks, the others double quotes."""
        assert quote_identifier(Dialect.SQLITE, "users") == '"users"'
        assert quote_identifier(Dialect.POSTGRES, "users") == '"users"'
        assert quote_identifier(Dialect.MYSQL, "users") == "`users`"

    def test_placeholder(self) -> None:
        """Postgres numbers placeholders, the others use question marks."""
        assert placeholder(Dialect.SQLITE, 3) == "?"
        assert placeholder(Dialect.MYSQL, 3) == "?"
        assert placeholder(Dialect.POSTGRES, 1) == "$1"
        assert placeholder(Dialect.POSTGRES, 12) == "$12"


class TestIdentifierValidation:
    """Test table and column name validation."""

    @pytest.mark.parametrize(
        "name",
        ["users", "_private", "Table1", "a", "content_data_2", "x" * 64],
    )
    def test_valid_names(self, name: str) -> None:
        """Well-formed names pass both validators."""
        valid_table_name(name)
        valid_column_name(name)
        assert is_valid_identifier(name)

    @pytest.mark.parametrize(
        "name,message",
        [
            ("", "cannot be empty"),
            ("x" * 65, "too long"),
            ("1users", "invalid table name format"),
            ("user-name", "invalid table name format"),
            ("users; DROP TABLE x", "invalid table name format"),
            ('users"', "invalid table name format"),
            ("café", "invalid table name format"),
            ("select", "SQL keyword"),
            ("Table", "SQL keyword"),
            ("on", "SQL keyword"),
        ],
    )
    def test_invalid_table_names(self, name: str, message: str) -> None:
        """Bad table names raise InvalidIdentifierError."""
        with pytest.raises(InvalidIdentifierError, match=message):
            valid_table_name(name)

    def test_invalid_column_name_mentions_column(self) -> None:
        """Column errors say which kind of identifier failed."""
        with pytest.raises(InvalidIdentifierError, match="column name"):
            valid_column_name("where")

    def test_non_ascii_letters_rejected(self) -> None:
        """Only ASCII letters are accepted."""
        assert not is_valid_identifier("naïve")
        assert not is_valid_identifier("")


class TestColumnTypes:
    """Test portable column types."""

    @pytest.mark.parametrize("name", [t.value for t in ColumnType])
    def test_validate_column_type(self, name: str) -> None:
        """Every canonical lower-case name validates."""
        assert validate_column_type(name) == ColumnType(name)

    @pytest.mark.parametrize("name", ["TEXT", "varchar", "", "int"])
    def test_validate_column_type_rejects(self, name: str) -> None:
        """Anything else raises InvalidColumnTypeError."""
        with pytest.raises(InvalidColumnTypeError, match="invalid column type"):
            validate_column_type(name)

    @pytest.mark.parametrize(
        "column_type,sqlite,mysql,postgres",
        [
            (ColumnType.TEXT, "TEXT", "TEXT", "TEXT"),
            (ColumnType.INTEGER, "INTEGER", "INT", "INTEGER"),
            (ColumnType.REAL, "REAL", "DOUBLE", "DOUBLE PRECISION"),
            (ColumnType.BLOB, "BLOB", "BLOB", "BYTEA"),
            (ColumnType.BOOLEAN, "INTEGER", "TINYINT(1)", "BOOLEAN"),
            (ColumnType.TIMESTAMP, "TEXT", "TIMESTAMP", "TIMESTAMP"),
            (ColumnType.JSON, "TEXT", "JSON", "JSONB"),
        ],
    )
    def test_sql_type_table(
        self, column_type: ColumnType, sqlite: str, mysql: str, postgres: str
    ) -> None:
        """Each dialect maps every type to its own keyword."""
        assert sql_type(Dialect.SQLITE, column_type) == sqlite
        assert sql_type(Dialect.MYSQL, column_type) == mysql
        assert sql_type(Dialect.POSTGRES, column_type.value) == postgres

    def test_sql_type_unknown_dialect_uses_sqlite(self) -> None:
        """Unrecognized dialects get the SQLite mapping."""
        assert sql_type("oracle", ColumnType.BOOLEAN) == "INTEGER"

    def test_sql_type_unknown_type_is_echoed(self) -> None:
        """Unrecognized types are returned verbatim."""
        assert sql_type(Dialect.POSTGRES, "uuid") == "uuid"
