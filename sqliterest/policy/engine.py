"""Policy layer for identifiers that cannot be bound as parameters.

Filter values, payload values and pagination numbers are always bound or
parsed as integers.  The ``on_conflict`` target columns are the one place
where client input is rendered into SQL text as identifiers, so
``PolicyEngine`` checks them before the compiler uses them:

* every name must be a plain SQL identifier;
* when a :class:`~sqliterest.schema.snapshot.SchemaSnapshot` is configured,
  every name must be a column of the target table.

Example::

    policy = PolicyConfig(
        snapshot=schema_from_sqlalchemy(engine),
        limit_single_entry_update=False,
    )
    compiled = sqliterest.compile_request("insert", request, policy)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sqliterest.errors import DisallowedColumnError
from sqliterest.schema.snapshot import SchemaSnapshot

logger = logging.getLogger(__name__)

IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass
class PolicyConfig:
    """Runtime policy configuration applied to every request.

    Attributes:
        snapshot: Known schema.  When set, ``on_conflict`` columns must be
            columns of the target table.  ``None`` only enforces the
            identifier syntax.
        limit_single_entry_update: Append ``limit 1`` to single-entry
            updates.  Only valid when SQLite is built with
            ``SQLITE_ENABLE_UPDATE_DELETE_LIMIT``.
    """

    snapshot: SchemaSnapshot | None = None
    limit_single_entry_update: bool = False


class PolicyEngine:
    """Applies :class:`PolicyConfig` rules to parsed request pieces.

    Args:
        config: Policy rules for this request.
    """

    def __init__(self, config: PolicyConfig | None = None) -> None:
        self._config = config or PolicyConfig()

    @property
    def config(self) -> PolicyConfig:
        return self._config

    def check_conflict_columns(self, table: str, columns: list[str]) -> list[str]:
        """Validate the ``on_conflict`` target of an insert into ``table``.

        Args:
            table: Target table name.
            columns: Column names from the ``on_conflict`` parameter.

        Returns:
            ``columns`` unchanged.

        Raises:
            DisallowedColumnError: On the first column that is not a plain
                identifier or not a column of ``table``.
        """
        allowed = self._allowed_columns(table)
        for column in columns:
            if not IDENTIFIER.fullmatch(column):
                logger.debug("rejected conflict column %r on %s", column, table)
                raise DisallowedColumnError(table, column, allowed or [])
            if allowed is not None and column not in allowed:
                logger.debug("unknown conflict column %r on %s", column, table)
                raise DisallowedColumnError(table, column, allowed)
        return columns

    def _allowed_columns(self, table: str) -> list[str] | None:
        if self._config.snapshot is None:
            return None
        return self._config.snapshot.get_column_names(table)
