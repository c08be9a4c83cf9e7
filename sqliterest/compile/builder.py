"""Request -> SQL statement compilation.

``StatementCompiler`` is the top-level orchestrator.  It runs the request
parsers, wires the clause-level sub-builders together and assembles one
statement per call.

Sub-builder hierarchy
---------------------
StatementCompiler
  ├── SelectListBuilder    (clause_builders.py)
  ├── WhereClauseBuilder   (clause_builders.py)
  ├── OrderClauseBuilder   (clause_builders.py)
  ├── LimitClauseBuilder   (clause_builders.py)
  ├── SetClauseBuilder     (clause_builders.py)
  ├── ValuesClauseBuilder  (clause_builders.py)
  └── OnConflictBuilder    (clause_builders.py)

Every ``compile_*`` call creates a fresh
:class:`~sqliterest.compile.context.RuntimeContext`, so compiling the same
request twice yields identical SQL and parameters.
"""

from __future__ import annotations

import logging

from sqliterest.compile.base import CompiledQuery
from sqliterest.compile.clause_builders import (
    LimitClauseBuilder,
    OnConflictBuilder,
    OrderClauseBuilder,
    SelectListBuilder,
    SetClauseBuilder,
    ValuesClauseBuilder,
    WhereClauseBuilder,
)
from sqliterest.compile.content_range import (
    CONTENT_RANGE_HEADER,
    RANGE_UNIT,
    RANGE_UNIT_HEADER,
    UNKNOWN_TOTAL,
    format_content_range,
)
from sqliterest.compile.context import CompilationContext, RuntimeContext
from sqliterest.errors import BadRequestError
from sqliterest.parse.filters import parse_filters
from sqliterest.parse.order import parse_request_order
from sqliterest.parse.pagination import resolve_pagination
from sqliterest.parse.payload import decode_payload
from sqliterest.parse.preference import parse_preference
from sqliterest.policy.engine import PolicyConfig, PolicyEngine
from sqliterest.request.snapshot import RequestSnapshot
from sqliterest.schema.models import Preference

logger = logging.getLogger(__name__)


class StatementCompiler:
    """Compiles one request snapshot to parameterized SQLite statements.

    Table and column identifiers in filters, ``select`` and ``order`` are
    used verbatim; checking them is the access-control layer's job.

    Args:
        request: The captured request.
        policy: Optional policy configuration; defaults to
            ``PolicyConfig()``.
    """

    def __init__(
        self,
        request: RequestSnapshot,
        policy: PolicyConfig | None = None,
    ) -> None:
        self._ctx = CompilationContext(request=request, policy=PolicyEngine(policy))

    @property
    def request(self) -> RequestSnapshot:
        return self._ctx.request

    @property
    def preference(self) -> Preference:
        """The parsed ``Prefer`` header.

        Raises:
            BadRequestError: If the header has an unsupported value.
        """
        return parse_preference(self._ctx.request)

    # ------------------------------------------------------------------
    # Read statements
    # ------------------------------------------------------------------

    def compile_select(self) -> CompiledQuery:
        """``select <cols> from <table>[ where …][ order by …][ limit …]``.

        Raises:
            UnsupportedOperatorError: On a bad filter.
            PayloadDecodeError: On a malformed ``in`` list.
            OrderFormatError: On a malformed ``order`` parameter.
            BadRequestError: On non-numeric pagination.
        """
        runtime = RuntimeContext()
        sql = f"select {SelectListBuilder(self._ctx).build()} from {self._ctx.table}"
        sql += WhereClauseBuilder(runtime).build(parse_filters(self._ctx.request))
        sql += OrderClauseBuilder().build(parse_request_order(self._ctx.request))
        sql += LimitClauseBuilder().build(resolve_pagination(self._ctx.request))
        return self._finish("select", sql, runtime)

    def compile_exact_count(self) -> CompiledQuery:
        """``select count(1) from <table>[ where …]``; no order or paging."""
        runtime = RuntimeContext()
        sql = f"select count(1) from {self._ctx.table}"
        sql += WhereClauseBuilder(runtime).build(parse_filters(self._ctx.request))
        return self._finish("exact_count", sql, runtime)

    # ------------------------------------------------------------------
    # Write statements
    # ------------------------------------------------------------------

    def compile_insert(self) -> CompiledQuery:
        """``insert into <table> (<cols>) values (…), …[ on conflict …]``.

        Raises:
            BadRequestError: On an unsupported ``Prefer`` value or an empty
                payload.
            DisallowedColumnError: On a rejected ``on_conflict`` column.
            UnsupportedMediaTypeError: If the body is not JSON.
            PayloadDecodeError: If the body is malformed.
        """
        preference = self.preference
        payload = decode_payload(self._ctx.request)

        runtime = RuntimeContext()
        sql = f"insert into {self._ctx.table} "
        sql += ValuesClauseBuilder(runtime).build(payload)
        sql += OnConflictBuilder(self._ctx).build(
            preference.resolution, payload.sorted_columns()
        )
        return self._finish("insert", sql, runtime)

    def compile_update(self) -> CompiledQuery:
        """``update <table> set <col> = ?, …[ where …]``.

        Raises:
            BadRequestError: If the payload does not hold exactly one row.
        """
        runtime = RuntimeContext()
        sql = self._build_update(runtime)
        sql += WhereClauseBuilder(runtime).build(parse_filters(self._ctx.request))
        return self._finish("update", sql, runtime)

    def compile_update_single_entry(self) -> CompiledQuery:
        """Like :meth:`compile_update`, but a filter is mandatory.

        The filter is expected to select a single row (typically by primary
        key).  SQLite only honours a row limit on UPDATE when built with
        ``SQLITE_ENABLE_UPDATE_DELETE_LIMIT``; ``limit 1`` is appended only
        when :attr:`PolicyConfig.limit_single_entry_update` is set.

        Raises:
            BadRequestError: If no filter clause is given, or the payload
                does not hold exactly one row.
        """
        runtime = RuntimeContext()
        sql = self._build_update(runtime)
        clauses = parse_filters(self._ctx.request)
        if not clauses:
            logger.debug("single entry update on %s without filter", self._ctx.table)
            raise BadRequestError("expect to specify primary key query")
        sql += WhereClauseBuilder(runtime).build(clauses)
        if self._ctx.policy.config.limit_single_entry_update:
            sql += " limit 1"
        return self._finish("update_single_entry", sql, runtime)

    def compile_delete(self) -> CompiledQuery:
        """``delete from <table>[ where …]``."""
        runtime = RuntimeContext()
        sql = f"delete from {self._ctx.table}"
        sql += WhereClauseBuilder(runtime).build(parse_filters(self._ctx.request))
        return self._finish("delete", sql, runtime)

    # ------------------------------------------------------------------
    # Response headers
    # ------------------------------------------------------------------

    def content_range_header(self, total: str) -> str:
        """Render ``Content-Range`` for the request's pagination.

        Args:
            total: Total row count as a string, or ``"*"`` when unknown.

        Returns:
            The header value, or ``""`` when the request is not paginated
            or its pagination cannot be resolved.
        """
        try:
            pagination = resolve_pagination(self._ctx.request)
        except BadRequestError:
            return ""
        return format_content_range(pagination, total)

    def response_headers(self, total: int | None = None) -> dict[str, str]:
        """Return the ``Range-Unit`` / ``Content-Range`` headers for a select.

        Args:
            total: Exact row count when ``Prefer: count=exact`` was honoured,
                otherwise ``None`` (rendered as ``*``).
        """
        headers = {RANGE_UNIT_HEADER: RANGE_UNIT}
        content_range = self.content_range_header(
            UNKNOWN_TOTAL if total is None else str(total)
        )
        if content_range:
            headers[CONTENT_RANGE_HEADER] = content_range
        return headers

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _build_update(self, runtime: RuntimeContext) -> str:
        payload = decode_payload(self._ctx.request)
        return f"update {self._ctx.table} set {SetClauseBuilder(runtime).build(payload)}"

    def _finish(self, operation: str, sql: str, runtime: RuntimeContext) -> CompiledQuery:
        compiled = CompiledQuery(sql=sql, params=tuple(runtime.params))
        logger.debug("compiled %s: %s", operation, compiled)
        return compiled
