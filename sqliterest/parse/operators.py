"""The filter operator table.

Every operator the request grammar accepts maps to exactly one clause
builder.  The table is closed: it is built once at import time from the
:class:`~sqliterest.schema.expressions.FilterOp` enum and exposed through a
read-only mapping, so no caller can register additional operators at
runtime.

A clause builder has the signature ``(column, op_token, value) -> Clause``:
``op_token`` is the raw operator token as sent by the client and is only
used in error messages.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from types import MappingProxyType

from sqliterest.errors import PayloadDecodeError, UnsupportedOperatorError
from sqliterest.schema.expressions import BINARY_SQL_OPERATORS, IS_VALUES, FilterOp
from sqliterest.schema.models import Clause

#: Type alias for a clause builder.
ClauseBuilder = Callable[[str, str, str], Clause]


def _binary(sql_op: str) -> ClauseBuilder:
    def build(column: str, op_token: str, value: str) -> Clause:
        return Clause(expr=f"{column} {sql_op} ?", values=(value,))

    return build


def _build_in(column: str, op_token: str, value: str) -> Clause:
    """``in.(1,2,3)`` -> ``column IN (?,?,?)``.

    The list body is decoded as a JSON array, so strings must be
    double-quoted: ``in.("a","b")``.
    """
    body = value
    if body.startswith("("):
        body = body[1:]
    if body.endswith(")"):
        body = body[:-1]
    try:
        items = json.loads(f"[{body}]")
    except (json.JSONDecodeError, RecursionError) as exc:
        raise PayloadDecodeError("in", str(exc)) from exc
    if not items:
        # "IN ()" is not valid SQLite
        raise UnsupportedOperatorError(f"{op_token}.{value}")
    placeholders = ",".join("?" * len(items))
    return Clause(expr=f"{column} IN ({placeholders})", values=tuple(items))


def _build_is(column: str, op_token: str, value: str) -> Clause:
    key = value.lower()
    if key not in IS_VALUES:
        raise UnsupportedOperatorError(f"{op_token}.{value}")
    return Clause(expr=f"{column} IS ?", values=(IS_VALUES[key],))


def _make_table() -> Mapping[FilterOp, ClauseBuilder]:
    table: dict[FilterOp, ClauseBuilder] = {
        op: _binary(sql_op) for op, sql_op in BINARY_SQL_OPERATORS.items()
    }
    table[FilterOp.IN] = _build_in
    table[FilterOp.IS] = _build_is
    missing = set(FilterOp) - set(table)
    if missing:
        raise RuntimeError(f"filter operators without a builder: {sorted(missing)}")
    return MappingProxyType(table)


OPERATORS: Mapping[FilterOp, ClauseBuilder] = _make_table()


def get_builder(op_token: str) -> ClauseBuilder | None:
    """Return the clause builder for ``op_token``, or ``None`` if unknown."""
    try:
        op = FilterOp(op_token)
    except ValueError:
        return None
    return OPERATORS[op]


def supported_operators() -> list[str]:
    """Return the sorted list of operator tokens."""
    return sorted(op.value for op in OPERATORS)
