"""Clause-level SQL builders.

Each class handles exactly one SQL clause and returns its fragment,
including the leading space when the clause is optional.  Builders that
emit placeholders push the matching values into the shared
:class:`~sqliterest.compile.context.RuntimeContext` in placeholder order.

Classes
-------
SelectListBuilder      ``<col>, <col>`` / ``*``
WhereClauseBuilder     `` where <clause> and <clause>``
OrderClauseBuilder     `` order by <item>, <item>``
LimitClauseBuilder     `` limit <n>[ offset <m>]``
SetClauseBuilder       ``<col> = ?, <col> = ?``
ValuesClauseBuilder    ``(<cols>) values (?, ?), (?, ?)``
OnConflictBuilder      `` on conflict[ (<cols>)] do nothing | do update set …``
"""
from __future__ import annotations

from sqliterest.compile.context import CompilationContext, RuntimeContext
from sqliterest.errors import BadRequestError
from sqliterest.schema.expressions import ResolutionMethod
from sqliterest.schema.models import Clause, InputPayload, OrderSpec, Pagination

SELECT_KEY = "select"
ON_CONFLICT_KEY = "on_conflict"


class SelectListBuilder:
    """Builds the result column list from the ``select`` parameter.

    Columns are split on commas and used verbatim.
    """

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self) -> str:
        raw = self._ctx.request.query_value(SELECT_KEY)
        if raw == "":
            return "*"
        return ", ".join(raw.split(","))


class WhereClauseBuilder:
    """Builds the ``where`` clause, AND-ing every filter clause."""

    def __init__(self, runtime: RuntimeContext) -> None:
        self._runtime = runtime

    def build(self, clauses: list[Clause]) -> str:
        if not clauses:
            return ""
        for clause in clauses:
            self._runtime.add_values(clause.values)
        return " where " + " and ".join(c.expr for c in clauses)


class OrderClauseBuilder:
    """Builds the ``order by`` clause."""

    def build(self, specs: list[OrderSpec]) -> str:
        if not specs:
            return ""
        return " order by " + ", ".join(s.render() for s in specs)


class LimitClauseBuilder:
    """Builds ``limit`` / ``offset``.

    A zero offset is omitted.  An unbounded limit is rendered as
    ``limit -1``, which SQLite defines as "no upper bound".
    """

    def build(self, pagination: Pagination | None) -> str:
        if pagination is None:
            return ""
        sql = f" limit {pagination.limit:d}"
        if pagination.offset != 0:
            sql += f" offset {pagination.offset:d}"
        return sql


class SetClauseBuilder:
    """Builds ``<col> = ?, …`` from a single-row payload.

    Raises:
        BadRequestError: If the payload has no row, no columns, or more than
            one row.
    """

    def __init__(self, runtime: RuntimeContext) -> None:
        self._runtime = runtime

    def build(self, payload: InputPayload) -> str:
        if not payload.rows:
            raise BadRequestError("no data to update")
        if not payload.columns:
            raise BadRequestError("no columns to update")
        if len(payload.rows) > 1:
            raise BadRequestError("too many data to update")

        columns = payload.sorted_columns()
        (row,) = payload.values(columns)
        self._runtime.add_values(row)
        return ", ".join(f"{column} = ?" for column in columns)


class ValuesClauseBuilder:
    """Builds ``(<sorted cols>) values (?, ?), …`` for a multi-row insert.

    Every row gets one placeholder per unioned column; missing keys bind
    ``None``.

    Raises:
        BadRequestError: If the payload has no rows or no columns.
    """

    def __init__(self, runtime: RuntimeContext) -> None:
        self._runtime = runtime

    def build(self, payload: InputPayload) -> str:
        if not payload.rows:
            raise BadRequestError("no data to insert")
        if not payload.columns:
            raise BadRequestError("no columns to insert")

        columns = payload.sorted_columns()
        row_placeholder = "(" + ", ".join("?" * len(columns)) + ")"
        rows = payload.values(columns)
        for row in rows:
            self._runtime.add_values(row)
        placeholders = ", ".join(row_placeholder for _ in rows)
        return f"({', '.join(columns)}) values {placeholders}"


class OnConflictBuilder:
    """Builds the upsert tail of an insert.

    The conflict target comes from the ``on_conflict`` comma-list parameter
    and is checked by the policy engine; identifiers cannot be bound.
    """

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, resolution: ResolutionMethod, columns: list[str]) -> str:
        if resolution is ResolutionMethod.NONE:
            return ""

        target = self._conflict_target()
        if resolution is ResolutionMethod.IGNORE_DUPLICATES:
            return f" on conflict{target} do nothing"

        assignments = ", ".join(f"{c} = excluded.{c}" for c in columns)
        return f" on conflict{target} do update set {assignments}"

    def _conflict_target(self) -> str:
        raw = self._ctx.request.query_value(ON_CONFLICT_KEY)
        if raw == "":
            return ""
        columns = self._ctx.policy.check_conflict_columns(self._ctx.table, raw.split(","))
        return f" ({', '.join(columns)})"
