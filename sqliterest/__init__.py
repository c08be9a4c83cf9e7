"""sqliterest – PostgREST-style request compilation for SQLite.

Turn HTTP requests into parameterized SQL.

Public API
----------
``compile_request``
    Parse a captured request and compile it to one parameterized SQL
    statement.

``RequestSnapshot``
    Immutable request view (table, query parameters, headers, body read
    once).

``StatementCompiler``
    Per-request compiler exposing every statement kind plus the
    ``Content-Range`` / ``Range-Unit`` response headers.

Re-exported types
-----------------
``CompiledQuery``, ``Operation``, ``PolicyConfig``, ``SchemaSnapshot``,
the parsed request models, and all error classes.

Example::

    request = RequestSnapshot.capture(
        "books",
        "author=eq.Tolkien&order=title.asc&limit=10",
        headers={"Prefer": "count=exact"},
    )
    compiled = sqliterest.compile_request("select", request)
    rows = conn.execute(compiled.sql, compiled.params).fetchall()
"""

from __future__ import annotations

from sqliterest.compile.base import CompiledQuery
from sqliterest.compile.builder import StatementCompiler
from sqliterest.compile.operations import HTTP_METHOD_OPERATIONS, Operation, compile_operation
from sqliterest.errors import (
    BadRequestError,
    DisallowedColumnError,
    OrderFormatError,
    PayloadDecodeError,
    SqliteRestError,
    UnsupportedMediaTypeError,
    UnsupportedOperatorError,
)
from sqliterest.policy.engine import PolicyConfig, PolicyEngine
from sqliterest.request.snapshot import RESERVED_KEYS, RequestSnapshot
from sqliterest.schema.converters import schema_from_sqlalchemy
from sqliterest.schema.expressions import CountMethod, FilterOp, ResolutionMethod
from sqliterest.schema.models import (
    Clause,
    InputPayload,
    OrderSpec,
    Pagination,
    Preference,
)
from sqliterest.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo

__all__ = [
    # Core pipeline
    "compile_request",
    "StatementCompiler",
    "CompiledQuery",
    "Operation",
    "HTTP_METHOD_OPERATIONS",
    # Request
    "RequestSnapshot",
    "RESERVED_KEYS",
    # Parsed models
    "Clause",
    "InputPayload",
    "OrderSpec",
    "Pagination",
    "Preference",
    "CountMethod",
    "FilterOp",
    "ResolutionMethod",
    # Policy
    "PolicyConfig",
    "PolicyEngine",
    # Schema
    "SchemaSnapshot",
    "TableInfo",
    "ColumnInfo",
    "schema_from_sqlalchemy",
    # Errors
    "SqliteRestError",
    "BadRequestError",
    "UnsupportedMediaTypeError",
    "UnsupportedOperatorError",
    "OrderFormatError",
    "PayloadDecodeError",
    "DisallowedColumnError",
]


def compile_request(
    operation: Operation | str,
    request: RequestSnapshot,
    policy: PolicyConfig | None = None,
) -> CompiledQuery:
    """Compile ``request`` to the statement kind named by ``operation``.

    This is the main entry point::

        compiled = sqliterest.compile_request(
            Operation.INSERT,
            RequestSnapshot.capture(
                "books",
                "on_conflict=id",
                headers={
                    "Content-Type": "application/json",
                    "Prefer": "resolution=merge-duplicates",
                },
                body=b'[{"id": 1, "title": "Dune"}]',
            ),
            policy=PolicyConfig(snapshot=snapshot),
        )
        conn.execute(compiled.sql, compiled.params)

    Args:
        operation: One of ``select``, ``exact_count``, ``insert``,
            ``update``, ``update_single_entry``, ``delete``.
        request: The captured request.
        policy: Optional policy configuration; defaults to
            ``PolicyConfig()``.

    Returns:
        ``CompiledQuery`` with ``sql`` text and ordered ``params``.

    Raises:
        SqliteRestError: (or subclass) for any invalid request.
        ValueError: If ``operation`` is unknown.
    """
    return compile_operation(StatementCompiler(request, policy), operation)
