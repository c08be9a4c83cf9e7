"""Compilation context objects.

``CompilationContext`` packages the ``(request, policy)`` pair every
sub-builder needs.  ``RuntimeContext`` collects bound values for one
statement, in placeholder order.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from sqliterest.policy.engine import PolicyEngine
from sqliterest.request.snapshot import RequestSnapshot


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context shared by all statements of one request.

    Attributes:
        request: The request snapshot being compiled.
        policy: Policy engine for identifier checks.
    """

    request: RequestSnapshot
    policy: PolicyEngine

    @property
    def table(self) -> str:
        return self.request.table


@dataclass
class RuntimeContext:
    """Accumulates bound values during a single compilation run."""

    params: list[Any] = field(default_factory=list)

    def add_values(self, values: Iterable[Any]) -> None:
        """Append values for placeholders emitted in the same order."""
        self.params.extend(values)
