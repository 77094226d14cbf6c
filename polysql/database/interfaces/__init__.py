"""Database interfaces module."""

from .connection import DatabaseConnection, DatabaseTransaction, RowCursor

__all__ = [
    "DatabaseConnection",
    "DatabaseTransaction",
    "RowCursor",
]
