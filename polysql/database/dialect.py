"""Dialect lookup, identifier quoting and placeholder rendering."""

from polysql.types import Dialect

_DIALECT_NAMES: dict[str, Dialect] = {
    "mysql": Dialect.MYSQL,
    "postgres": Dialect.POSTGRES,
    # SQLAlchemy backend name
    "postgresql": Dialect.POSTGRES,
}


def dialect_from_name(name: str | None) -> Dialect:
    """Return the dialect matching a driver name.

    Unrecognized or empty names resolve to SQLite so that missing
    configuration never fails.

    Args:
        name: Driver or backend name (e.g. "mysql", "postgres")

    Returns:
        Matching dialect
    """
    if not name:
        return Dialect.SQLITE
    return _DIALECT_NAMES.get(name, Dialect.SQLITE)


def resolve_dialect(dialect: Dialect | str | None) -> Dialect:
    """Normalize a caller-supplied dialect tag to a Dialect member.

    Plain names go through ``dialect_from_name``, so ``"postgresql"`` and
    unknown names behave the same as in configuration.
    """
    if isinstance(dialect, Dialect):
        return dialect
    return dialect_from_name(dialect)


def quote_identifier(dialect: Dialect, name: str) -> str:
    """Wrap an identifier in the dialect's quote characters.

    MySQL uses backticks; SQLite and PostgreSQL use double quotes. The name
    must already be validated.
    """
    if dialect == Dialect.MYSQL:
        return f"`{name}`"
    return f'"{name}"'


def placeholder(dialect: Dialect, index: int) -> str:
    """Return the bound parameter marker for a 1-based position."""
    if dialect == Dialect.POSTGRES:
        return f"${index}"
    return "?"
