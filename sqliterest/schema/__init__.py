"""sqliterest schema models: parsed request pieces and SchemaSnapshot."""
from sqliterest.schema.expressions import CountMethod, FilterOp, ResolutionMethod
from sqliterest.schema.models import (
    UNBOUNDED,
    Clause,
    InputPayload,
    OrderSpec,
    Pagination,
    Preference,
)
from sqliterest.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo

__all__ = [
    "CountMethod",
    "FilterOp",
    "ResolutionMethod",
    "UNBOUNDED",
    "Clause",
    "InputPayload",
    "OrderSpec",
    "Pagination",
    "Preference",
    "ColumnInfo",
    "SchemaSnapshot",
    "TableInfo",
]
