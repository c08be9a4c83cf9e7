"""Statement kinds and their compiler entry points.

The request layer maps each HTTP verb to one :class:`Operation`
(``GET`` -> ``select``, ``POST`` -> ``insert``, ``PATCH`` -> ``update``,
``PUT`` -> ``update_single_entry``, ``DELETE`` -> ``delete``) and calls
:func:`compile_operation`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType

from sqliterest.compile.base import CompiledQuery
from sqliterest.compile.builder import StatementCompiler


class Operation(str, Enum):
    """The statements the compiler can produce."""

    SELECT = "select"
    EXACT_COUNT = "exact_count"
    INSERT = "insert"
    UPDATE = "update"
    UPDATE_SINGLE_ENTRY = "update_single_entry"
    DELETE = "delete"


_ENTRY_POINTS: Mapping[Operation, Callable[[StatementCompiler], CompiledQuery]] = MappingProxyType(
    {
        Operation.SELECT: StatementCompiler.compile_select,
        Operation.EXACT_COUNT: StatementCompiler.compile_exact_count,
        Operation.INSERT: StatementCompiler.compile_insert,
        Operation.UPDATE: StatementCompiler.compile_update,
        Operation.UPDATE_SINGLE_ENTRY: StatementCompiler.compile_update_single_entry,
        Operation.DELETE: StatementCompiler.compile_delete,
    }
)

#: Default operation per HTTP method.
HTTP_METHOD_OPERATIONS: Mapping[str, Operation] = MappingProxyType(
    {
        "GET": Operation.SELECT,
        "POST": Operation.INSERT,
        "PATCH": Operation.UPDATE,
        "PUT": Operation.UPDATE_SINGLE_ENTRY,
        "DELETE": Operation.DELETE,
    }
)


def compile_operation(
    compiler: StatementCompiler, operation: Operation | str
) -> CompiledQuery:
    """Run the compiler entry point for ``operation``.

    Raises:
        ValueError: If ``operation`` is not a known :class:`Operation`.
    """
    return _ENTRY_POINTS[Operation(operation)](compiler)
