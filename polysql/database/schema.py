"""Table and index definitions consumed by the schema builder."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from polysql.types import ColumnType, OnDeleteAction


@dataclass
class ColumnDefinition:
    """Database column definition.

    ``default`` is written into the DDL as an escaped string literal; an empty
    string means no default. Defaults are schema text, not user data: quotes
    are doubled (and backslashes on MySQL), but a MySQL server running with
    NO_BACKSLASH_ESCAPES will store doubled backslashes literally.
    """

    name: str
    type: ColumnType | str
    primary_key: bool = False
    not_null: bool = False
    unique: bool = False
    default: str | None = None

    @property
    def has_default(self) -> bool:
        """Check if the column declares a default value."""
        return self.default is not None and self.default != ""


@dataclass
class IndexDefinition:
    """Index declared alongside a table. The index name is derived."""

    columns: Sequence[str]
    unique: bool = False


@dataclass
class ForeignKeyDefinition:
    """Foreign key constraint on a single column."""

    column: str
    ref_table: str
    ref_column: str
    on_delete: OnDeleteAction | str | None = None


@dataclass
class TableDefinition:
    """Database table definition."""

    table: str
    columns: Sequence[ColumnDefinition]
    indexes: Sequence[IndexDefinition] = field(default_factory=list)
    foreign_keys: Sequence[ForeignKeyDefinition] = field(default_factory=list)
    if_not_exists: bool = False

    @property
    def column_names(self) -> list[str]:
        """Column names in declaration order."""
        return [col.name for col in self.columns]


@dataclass
class CreateIndexParams:
    """Standalone CREATE INDEX request."""

    table: str
    columns: Sequence[str]
    unique: bool = False
    if_not_exists: bool = False
