"""Pydantic models for the parsed pieces of a request.

Each parser in :mod:`sqliterest.parse` returns one of these models; the
statement compiler only ever sees parsed values, never raw strings.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sqliterest.schema.expressions import CountMethod, ResolutionMethod

#: Limit value meaning "no upper bound".  SQLite treats a negative LIMIT as
#: unbounded, so the sentinel may be rendered as-is.
UNBOUNDED = -1


@dataclass(frozen=True)
class Clause:
    """One WHERE predicate fragment and its bound values.

    Attributes:
        expr: SQL fragment with ``?`` placeholders (e.g. ``"id = ?"``).
        values: Values bound to the placeholders, in order.
    """

    expr: str
    values: tuple[Any, ...] = ()


class OrderSpec(BaseModel):
    """A single ``ORDER BY`` item.

    Attributes:
        column: Column name, verbatim.
        direction: Second token (``asc`` / ``desc`` or a translated nulls
            ordering), verbatim otherwise.
        nulls: Third token, translated when it is a nulls ordering.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    column: str
    direction: str | None = None
    nulls: str | None = None

    def render(self) -> str:
        """Return the SQL fragment (e.g. ``"id desc nulls last"``)."""
        parts = [self.column]
        if self.direction is not None:
            parts.append(self.direction)
        if self.nulls is not None:
            parts.append(self.nulls)
        return " ".join(parts)


class Pagination(BaseModel):
    """Resolved ``LIMIT`` / ``OFFSET``.

    Attributes:
        limit: Row count, or :data:`UNBOUNDED`.
        offset: Zero-based index of the first row.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    limit: int
    offset: int = 0

    @property
    def unbounded(self) -> bool:
        return self.limit < 0


class Preference(BaseModel):
    """Parsed ``Prefer`` header.

    Attributes:
        count: Whether the client asked for an exact total count.
        resolution: Upsert strategy for inserts.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    count: CountMethod = CountMethod.NONE
    resolution: ResolutionMethod = ResolutionMethod.NONE


class InputPayload(BaseModel):
    """Decoded JSON body.

    Attributes:
        columns: Union of the keys of every row.
        rows: Decoded objects in body order; rows may be sparse.
    """

    model_config = ConfigDict(extra="forbid")

    columns: set[str] = Field(default_factory=set)
    rows: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_rows(cls, rows: list[dict[str, Any]]) -> InputPayload:
        """Build a payload, collecting the column union from ``rows``."""
        columns: set[str] = set()
        for row in rows:
            columns.update(row)
        return cls(columns=columns, rows=rows)

    def sorted_columns(self) -> list[str]:
        """Returns the column union in lexicographic order."""
        return sorted(self.columns)

    def values(self, columns: list[str]) -> list[tuple[Any, ...]]:
        """Returns one value tuple per row, ``None`` for missing keys.

        Args:
            columns: Column order, usually :meth:`sorted_columns`.
        """
        return [tuple(row.get(column) for column in columns) for row in self.rows]
