"""Utilities for building a SchemaSnapshot from external sources.

SQLAlchemy converter
--------------------
:func:`schema_from_sqlalchemy` reflects a live database engine and returns a
:class:`~sqliterest.schema.snapshot.SchemaSnapshot`.

Install the optional dependency before using this module::

    pip install "sqliterest[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from sqliterest.schema.converters import schema_from_sqlalchemy

    engine = create_engine("sqlite:///bookstore.db")
    snapshot = schema_from_sqlalchemy(engine)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqliterest.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo

if TYPE_CHECKING:
    from sqlalchemy import Engine, MetaData


def schema_from_sqlalchemy(
    engine: Engine,
    *,
    include_tables: list[str] | None = None,
    include_views: bool = False,
) -> SchemaSnapshot:
    """Build a :class:`SchemaSnapshot` by reflecting a SQLAlchemy engine.

    All tables visible to the engine (or a subset via *include_tables*) are
    reflected using SQLAlchemy's :class:`~sqlalchemy.schema.MetaData`.

    Args:
        engine: A :class:`sqlalchemy.engine.Engine` instance.
        include_tables: Optional allowlist of table names to reflect.
            When ``None`` all tables are reflected.
        include_views: Also reflect views.  Views carry no primary key.

    Returns:
        A fully populated :class:`SchemaSnapshot`.

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import MetaData as _MetaData
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for schema_from_sqlalchemy(). "
            'Install it with: pip install "sqliterest[sqlalchemy]"'
        ) from exc

    metadata = _MetaData()
    with engine.connect() as conn:
        metadata.reflect(bind=conn, only=include_tables, views=include_views)

    return _metadata_to_snapshot(metadata)


def _metadata_to_snapshot(metadata: MetaData) -> SchemaSnapshot:
    """Convert a reflected :class:`~sqlalchemy.schema.MetaData` into a
    :class:`SchemaSnapshot`.
    """
    tables = [
        TableInfo(
            name=table.name,
            columns=[
                ColumnInfo(
                    name=col.name,
                    type=str(col.type),
                    # Reflection leaves nullable unset (None) for some
                    # columns; treat that as nullable.
                    nullable=col.nullable is not False,
                    primary_key=bool(col.primary_key),
                )
                for col in table.columns
            ],
        )
        for table in metadata.sorted_tables
    ]
    return SchemaSnapshot(tables=tables)
