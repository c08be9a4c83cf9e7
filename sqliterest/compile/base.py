"""Compiler output: :class:`CompiledQuery`."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CompiledQuery:
    """The output of a successful compilation.

    Attributes:
        sql: SQL text with ``?`` placeholders, ready for
            ``sqlite3.Cursor.execute(sql, params)``.
        params: Values for the placeholders, in order.
    """

    sql: str
    params: tuple[Any, ...] = ()

    def __str__(self) -> str:
        return f"query={self.sql!r} values={list(self.params)}"
