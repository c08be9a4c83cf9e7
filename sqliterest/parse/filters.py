"""Filter clause parsing: ``<column>=<op>.<value>`` -> WHERE fragments."""
from __future__ import annotations

import logging

from sqliterest.errors import UnsupportedOperatorError
from sqliterest.parse.operators import get_builder
from sqliterest.request.snapshot import RequestSnapshot
from sqliterest.schema.models import Clause

logger = logging.getLogger(__name__)


def parse_filter(column: str, raw: str) -> list[Clause]:
    """Parse one filter value for ``column``.

    ``raw`` is split once on the first ``.``: ``"eq.1"`` becomes operator
    ``eq`` and value ``"1"``; ``"like.a.b"`` keeps ``"a.b"`` as the value.

    Args:
        column: The query key, used verbatim as the column name.
        raw: The query value (e.g. ``"in.(1,2,3)"``).

    Returns:
        The parsed clauses; empty when ``raw`` is empty.

    Raises:
        UnsupportedOperatorError: If the operator is unknown, or the operator
            or value is missing.
        PayloadDecodeError: If an ``in`` list is not valid JSON.
    """
    if raw == "":
        return []

    op_token, sep, value = raw.partition(".")
    if not sep or op_token == "" or value == "":
        raise UnsupportedOperatorError(raw)

    builder = get_builder(op_token)
    if builder is None:
        raise UnsupportedOperatorError(raw)
    return [builder(column, op_token, value)]


def parse_filters(request: RequestSnapshot) -> list[Clause]:
    """Parse every filterable query parameter of ``request``.

    Columns are visited in order of first appearance; repeated parameters
    on one column produce one clause each.  All clauses are AND-ed by the
    compiler.
    """
    clauses: list[Clause] = []
    for column in request.filter_keys():
        for raw in request.query_values(column):
            try:
                clauses.extend(parse_filter(column, raw))
            except UnsupportedOperatorError:
                logger.debug("rejected filter %s=%s", column, raw)
                raise
    return clauses
