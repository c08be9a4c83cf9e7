"""Test fixtures: sample bookstore DDL and SchemaSnapshot JSON."""

from __future__ import annotations

import json
from pathlib import Path

from sqliterest.schema.snapshot import SchemaSnapshot

_FIXTURES_DIR = Path(__file__).parent


def load_schema_snapshot() -> SchemaSnapshot:
    """Load the canonical sample SchemaSnapshot from schema.json."""
    data = json.loads((_FIXTURES_DIR / "schema.json").read_text())
    return SchemaSnapshot.model_validate(data)


def load_ddl() -> str:
    """Return the sample SQLite DDL and seed data."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()
