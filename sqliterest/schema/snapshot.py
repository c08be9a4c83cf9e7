"""Pydantic models for the SchemaSnapshot used by the policy engine.

The SchemaSnapshot describes the tables and columns a deployment exposes.
It is produced by the caller (by hand, from JSON, or via
:func:`~sqliterest.schema.converters.schema_from_sqlalchemy`) and is used to
validate identifiers that cannot be bound as parameters, such as the
``on_conflict`` target columns.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ColumnInfo(BaseModel):
    """Metadata for a single column.

    Attributes:
        name: Column name.
        type: SQL type string (e.g. ``'TEXT'``, ``'INTEGER'``).
        nullable: Whether the column can be NULL.
        primary_key: Whether the column is part of the primary key.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str
    nullable: bool = True
    primary_key: bool = False


class TableInfo(BaseModel):
    """Metadata for a single table or view.

    Attributes:
        name: Table name.
        columns: Ordered list of column metadata.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    columns: list[ColumnInfo]

    @property
    def column_names(self) -> list[str]:
        """Returns all column names for this table."""
        return [c.name for c in self.columns]

    @property
    def primary_key(self) -> list[str]:
        """Returns the primary-key column names, in declaration order."""
        return [c.name for c in self.columns if c.primary_key]


class SchemaSnapshot(BaseModel):
    """Describes the schema exposed through the API.

    Attributes:
        tables: All exposed tables and views.
    """

    model_config = ConfigDict(extra="forbid")

    tables: list[TableInfo]

    def get_table(self, name: str) -> TableInfo | None:
        """Returns the TableInfo for the given table name, or ``None``."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def get_column(self, table_name: str, column_name: str) -> ColumnInfo | None:
        """Returns the ColumnInfo for a table.column pair, or ``None``."""
        table = self.get_table(table_name)
        if table is None:
            return None
        for col in table.columns:
            if col.name == column_name:
                return col
        return None

    def get_column_names(self, table_name: str) -> list[str]:
        """Returns column names for ``table_name``, or ``[]`` if not found."""
        table = self.get_table(table_name)
        return table.column_names if table is not None else []

    @property
    def table_names(self) -> list[str]:
        """Returns all table names in the snapshot."""
        return [t.name for t in self.tables]
