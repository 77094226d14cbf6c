"""Identifier validation for table and column names.

Identifiers are the only part of generated SQL that is not parameter-bound,
so every builder passes names through these checks before rendering them.
"""

import re

from polysql.constants import MAX_IDENTIFIER_LENGTH, RESERVED_WORDS
from polysql.exceptions import InvalidIdentifierError

_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_valid_identifier(name: str) -> bool:
    """Check the identifier character rule.

    Only ASCII letters, digits and underscores are allowed, and the first
    character must be a letter or underscore.
    """
    return bool(name) and _IDENTIFIER_PATTERN.fullmatch(name) is not None


def _validate_identifier(kind: str, name: str) -> None:
    if not isinstance(name, str) or not name:
        raise InvalidIdentifierError(f"{kind} name cannot be empty")
    if len(name) > MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifierError(
            f"{kind} name too long (max {MAX_IDENTIFIER_LENGTH} characters)"
        )
    if not is_valid_identifier(name):
        raise InvalidIdentifierError(
            f"invalid {kind} name format {name!r}: must contain only letters, "
            "numbers, and underscores, and start with a letter or underscore"
        )
    if name.upper() in RESERVED_WORDS:
        raise InvalidIdentifierError(f"{kind} name cannot be a SQL keyword: {name}")


def valid_table_name(name: str) -> None:
    """Validate a table name.

    Args:
        name: Table name to check

    Raises:
        InvalidIdentifierError: If the name is empty, too long, malformed or
            a reserved SQL keyword
    """
    _validate_identifier("table", name)


def valid_column_name(name: str) -> None:
    """Validate a column name.

    Args:
        name: Column name to check

    Raises:
        InvalidIdentifierError: If the name is empty, too long, malformed or
            a reserved SQL keyword
    """
    _validate_identifier("column", name)
