"""Builder limits and fixed SQL vocabulary."""

from typing import Final

# Identifier rules
MAX_IDENTIFIER_LENGTH: Final[int] = 64
RESERVED_WORDS: Final[frozenset[str]] = frozenset(
    {
        "SELECT",
        "INSERT",
        "UPDATE",
        "DELETE",
        "DROP",
        "CREATE",
        "ALTER",
        "INDEX",
        "TABLE",
        "DATABASE",
        "SCHEMA",
        "VIEW",
        "PROCEDURE",
        "FUNCTION",
        "TRIGGER",
        "UNION",
        "WHERE",
        "ORDER",
        "GROUP",
        "HAVING",
        "FROM",
        "JOIN",
        "ON",
        "AS",
    }
)

# Table definition limits
MAX_COLUMNS: Final[int] = 64
ON_DELETE_ACTIONS: Final[tuple[str, ...]] = ("CASCADE", "SET NULL", "RESTRICT")

# SELECT row cap applied when no limit (or a larger one) is requested
MAX_SELECT_LIMIT: Final[int] = 10_000

# Index naming
INDEX_NAME_PREFIX: Final[str] = "idx"

# MySQL error text raised by CREATE INDEX on an existing index name
MYSQL_DUPLICATE_INDEX_MARKER: Final[str] = "Duplicate key name"
