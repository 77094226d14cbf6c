"""SQLAlchemy-backed implementation for server databases."""

from .sqla_connection import SQLAlchemyConnection, SQLAlchemyTransaction, to_text_clause

__all__ = [
    "SQLAlchemyConnection",
    "SQLAlchemyTransaction",
    "to_text_clause",
]
