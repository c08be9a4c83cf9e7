"""Shared pytest fixtures for sqliterest unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from sqliterest.policy.engine import PolicyConfig
from sqliterest.schema.snapshot import SchemaSnapshot
from tests.fixtures import load_ddl, load_schema_snapshot


@pytest.fixture(scope="session")
def snapshot() -> SchemaSnapshot:
    """Canonical bookstore schema snapshot shared across all tests."""
    return load_schema_snapshot()


@pytest.fixture(scope="session")
def schema_policy(snapshot: SchemaSnapshot) -> PolicyConfig:
    """Policy that checks conflict targets against the bookstore schema."""
    return PolicyConfig(snapshot=snapshot)


@pytest.fixture()
def db() -> Iterator[sqlite3.Connection]:
    """In-memory bookstore database, seeded."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.executescript(load_ddl())
    yield conn
    conn.close()
