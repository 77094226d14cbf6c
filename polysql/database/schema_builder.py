"""Dialect-aware CREATE TABLE / CREATE INDEX builder."""

from collections.abc import Sequence
from typing import NamedTuple

from polysql.constants import (
    INDEX_NAME_PREFIX,
    MAX_COLUMNS,
    MYSQL_DUPLICATE_INDEX_MARKER,
    ON_DELETE_ACTIONS,
)
from polysql.database.column_types import sql_type, validate_column_type
from polysql.database.dialect import quote_identifier, resolve_dialect
from polysql.database.schema import (
    ColumnDefinition,
    CreateIndexParams,
    ForeignKeyDefinition,
    TableDefinition,
)
from polysql.database.utils import escape_string_literal, quote_columns
from polysql.database.validation import valid_column_name, valid_table_name
from polysql.exceptions import SchemaInvariantError
from polysql.types import Dialect, OnDeleteAction


class IndexPolicy(NamedTuple):
    """Per-dialect CREATE INDEX behaviour."""

    supports_if_not_exists: bool
    duplicate_index_markers: tuple[str, ...]


_INDEX_POLICIES: dict[Dialect, IndexPolicy] = {
    Dialect.SQLITE: IndexPolicy(supports_if_not_exists=True, duplicate_index_markers=()),
    Dialect.MYSQL: IndexPolicy(
        supports_if_not_exists=False,
        duplicate_index_markers=(MYSQL_DUPLICATE_INDEX_MARKER,),
    ),
    Dialect.POSTGRES: IndexPolicy(
        supports_if_not_exists=True, duplicate_index_markers=()
    ),
}


def index_policy(dialect: Dialect) -> IndexPolicy:
    """Return the CREATE INDEX policy for a dialect (SQLite for unknown ones)."""
    return _INDEX_POLICIES.get(dialect, _INDEX_POLICIES[Dialect.SQLITE])


def index_name(table: str, columns: Sequence[str]) -> str:
    """Derive the index name from table and column names.

    Example:
        >>> index_name("tasks", ["status", "priority"])
        'idx_tasks_status_priority'
    """
    return "_".join([INDEX_NAME_PREFIX, table, *columns])


def _on_delete_value(action: OnDeleteAction | str | None) -> str | None:
    if action is None or action == "":
        return None
    if isinstance(action, OnDeleteAction):
        return action.value
    return action


class SchemaBuilder:
    """Builds DDL statements for one dialect.

    The builder is stateless apart from the dialect; validation runs on the
    whole definition before any SQL text is produced.
    """

    def __init__(self, dialect: Dialect | str) -> None:
        """Initialize schema builder.

        Args:
            dialect: Target SQL dialect (member or name)
        """
        self.dialect = resolve_dialect(dialect)
        self.policy = index_policy(self.dialect)

    def validate_table_definition(self, definition: TableDefinition) -> None:
        """Validate a table definition without side effects.

        Args:
            definition: Table definition to check

        Raises:
            InvalidIdentifierError: If a table or column name is unsafe
            InvalidColumnTypeError: If a column type is not portable
            SchemaInvariantError: If a structural rule is broken
        """
        valid_table_name(definition.table)

        columns = list(definition.columns)
        if not columns:
            raise SchemaInvariantError("columns cannot be empty")
        if len(columns) > MAX_COLUMNS:
            raise SchemaInvariantError(
                f"too many columns: {len(columns)} (max {MAX_COLUMNS})"
            )

        column_names: set[str] = set()
        primary_keys = 0
        for column in columns:
            valid_column_name(column.name)
            if column.name in column_names:
                raise SchemaInvariantError(f"duplicate column name {column.name!r}")
            column_names.add(column.name)
            validate_column_type(column.type)
            if column.primary_key:
                primary_keys += 1

        if primary_keys == 0:
            raise SchemaInvariantError("at least one primary key column is required")
        if primary_keys > 1:
            raise SchemaInvariantError(
                f"only one primary key column is allowed (got {primary_keys})"
            )

        for foreign_key in definition.foreign_keys:
            self._validate_foreign_key(foreign_key, column_names)

        for index in definition.indexes:
            if not index.columns:
                raise SchemaInvariantError("index columns cannot be empty")
            for column_name in index.columns:
                valid_column_name(column_name)
                if column_name not in column_names:
                    raise SchemaInvariantError(
                        f"index column {column_name!r} not found in column definitions"
                    )

    def _validate_foreign_key(
        self, foreign_key: ForeignKeyDefinition, column_names: set[str]
    ) -> None:
        valid_column_name(foreign_key.column)
        if foreign_key.column not in column_names:
            raise SchemaInvariantError(
                f"FK column {foreign_key.column!r} not found in column definitions"
            )
        valid_table_name(foreign_key.ref_table)
        valid_column_name(foreign_key.ref_column)

        action = _on_delete_value(foreign_key.on_delete)
        if action is not None and action not in ON_DELETE_ACTIONS:
            raise SchemaInvariantError(
                f"invalid FK ON DELETE action {action!r}: must be one of "
                f"{', '.join(ON_DELETE_ACTIONS)}"
            )

    def _column_sql(self, column: ColumnDefinition) -> str:
        col_def = (
            f"{quote_identifier(self.dialect, column.name)} "
            f"{sql_type(self.dialect, column.type)}"
        )

        if column.not_null:
            col_def += " NOT NULL"

        if column.primary_key:
            col_def += " PRIMARY KEY"

        if column.unique and not column.primary_key:
            col_def += " UNIQUE"

        # Defaults are schema, not data: written as literals, never bound
        if column.has_default:
            default = escape_string_literal(self.dialect, str(column.default))
            col_def += f" DEFAULT '{default}'"

        return col_def

    def _foreign_key_sql(self, foreign_key: ForeignKeyDefinition) -> str:
        fk_def = (
            f"FOREIGN KEY ({quote_identifier(self.dialect, foreign_key.column)}) "
            f"REFERENCES {quote_identifier(self.dialect, foreign_key.ref_table)} "
            f"({quote_identifier(self.dialect, foreign_key.ref_column)})"
        )
        action = _on_delete_value(foreign_key.on_delete)
        if action is not None:
            fk_def += f" ON DELETE {action}"
        return fk_def

    def create_table_sql(self, definition: TableDefinition) -> str:
        """Generate CREATE TABLE SQL.

        Args:
            definition: Table definition

        Returns:
            CREATE TABLE SQL statement (indexes are separate statements)
        """
        self.validate_table_definition(definition)

        parts = [self._column_sql(column) for column in definition.columns]
        parts.extend(self._foreign_key_sql(fk) for fk in definition.foreign_keys)

        if_not_exists = "IF NOT EXISTS " if definition.if_not_exists else ""
        body = ",\n    ".join(parts)
        return (
            f"CREATE TABLE {if_not_exists}"
            f"{quote_identifier(self.dialect, definition.table)} (\n    {body}\n)"
        )

    def index_params(self, definition: TableDefinition) -> list[CreateIndexParams]:
        """Expand a table's declared indexes into CREATE INDEX requests."""
        return [
            CreateIndexParams(
                table=definition.table,
                columns=list(index.columns),
                unique=index.unique,
                if_not_exists=definition.if_not_exists,
            )
            for index in definition.indexes
        ]

    def create_index_sql(self, params: CreateIndexParams) -> tuple[str, str]:
        """Generate CREATE INDEX SQL.

        MySQL has no IF NOT EXISTS for indexes, so the clause is omitted there.

        Args:
            params: Index request

        Returns:
            Tuple of (index name, CREATE INDEX SQL statement)
        """
        valid_table_name(params.table)
        if not params.columns:
            raise SchemaInvariantError("create index: columns cannot be empty")
        columns_sql = quote_columns(self.dialect, params.columns)

        name = index_name(params.table, params.columns)
        unique = "UNIQUE " if params.unique else ""
        if_not_exists = (
            "IF NOT EXISTS "
            if params.if_not_exists and self.policy.supports_if_not_exists
            else ""
        )
        query = (
            f"CREATE {unique}INDEX {if_not_exists}"
            f"{quote_identifier(self.dialect, name)} ON "
            f"{quote_identifier(self.dialect, params.table)} ({columns_sql})"
        )
        return name, query

    def is_duplicate_index_error(
        self, params: CreateIndexParams, error: BaseException
    ) -> bool:
        """Check if a CREATE INDEX failure means the index already exists.

        Only dialects without IF NOT EXISTS support report this, and only when
        the caller asked for ``if_not_exists``.
        """
        if not params.if_not_exists or self.policy.supports_if_not_exists:
            return False
        message = str(error)
        return any(marker in message for marker in self.policy.duplicate_index_markers)
