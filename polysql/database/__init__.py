"""Multi-dialect DDL and CRUD builders with their execution entry points."""

from .column_types import VALID_COLUMN_TYPES, sql_type, validate_column_type
from .dialect import (
    dialect_from_name,
    placeholder,
    quote_identifier,
    resolve_dialect,
)
from .engine import create_database_engine, open_connection
from .implementations import (
    SQLAlchemyConnection,
    SQLAlchemyTransaction,
    SQLiteConnection,
    SQLiteTransaction,
)
from .interfaces import DatabaseConnection, DatabaseTransaction, RowCursor
from .introspection import (
    DriftEntry,
    check_schema_drift,
    detect_schema_drift,
    table_columns,
)
from .operations import (
    count,
    create_index,
    create_table,
    delete,
    exists,
    insert,
    select,
    select_one,
    select_rows,
    update,
)
from .params import DeleteParams, InsertParams, SelectParams, UpdateParams
from .query_builder import QueryBuilder
from .schema import (
    ColumnDefinition,
    CreateIndexParams,
    ForeignKeyDefinition,
    IndexDefinition,
    TableDefinition,
)
from .schema_builder import SchemaBuilder, index_name
from .validation import is_valid_identifier, valid_column_name, valid_table_name

__all__ = [
    # Dialect, identifiers and types
    "dialect_from_name",
    "resolve_dialect",
    "quote_identifier",
    "placeholder",
    "is_valid_identifier",
    "valid_table_name",
    "valid_column_name",
    "VALID_COLUMN_TYPES",
    "validate_column_type",
    "sql_type",
    # Definitions and parameters
    "ColumnDefinition",
    "IndexDefinition",
    "ForeignKeyDefinition",
    "TableDefinition",
    "CreateIndexParams",
    "SelectParams",
    "InsertParams",
    "UpdateParams",
    "DeleteParams",
    # Builders
    "SchemaBuilder",
    "QueryBuilder",
    "index_name",
    # Entry points
    "create_table",
    "create_index",
    "select",
    "select_rows",
    "select_one",
    "insert",
    "update",
    "delete",
    "count",
    "exists",
    # Introspection
    "DriftEntry",
    "table_columns",
    "check_schema_drift",
    "detect_schema_drift",
    # Handles
    "DatabaseConnection",
    "DatabaseTransaction",
    "RowCursor",
    "SQLiteConnection",
    "SQLiteTransaction",
    "SQLAlchemyConnection",
    "SQLAlchemyTransaction",
    "create_database_engine",
    "open_connection",
]
