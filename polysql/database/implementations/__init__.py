"""Database implementations package."""

from .sqla import SQLAlchemyConnection, SQLAlchemyTransaction
from .sqlite import SQLiteConnection, SQLiteTransaction

__all__ = [
    "SQLAlchemyConnection",
    "SQLAlchemyTransaction",
    "SQLiteConnection",
    "SQLiteTransaction",
]
