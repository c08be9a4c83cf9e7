"""Enumerations for the request grammar.

Filter operators, order keywords and ``Prefer`` values are all closed sets
known at build time.  They are defined here once and shared by the parsers
and the compiler.
"""

from __future__ import annotations

from enum import Enum

# ---------------------------------------------------------------------------
# Filter operators
# ---------------------------------------------------------------------------


class FilterOp(str, Enum):
    """Filter operator tokens accepted in ``<column>=<op>.<value>``."""

    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"
    LIKE = "like"
    ILIKE = "ilike"
    IN = "in"
    IS = "is"


#: SQL operator emitted for each binary filter operator.
BINARY_SQL_OPERATORS: dict[FilterOp, str] = {
    FilterOp.EQ: "=",
    FilterOp.NEQ: "!=",
    FilterOp.GT: ">",
    FilterOp.GE: ">=",
    FilterOp.LT: "<",
    FilterOp.LE: "<=",
    FilterOp.LIKE: "LIKE",
    FilterOp.ILIKE: "ILIKE",
}

#: Values accepted by the ``is`` operator (compared lower-cased).
IS_VALUES: dict[str, bool | None] = {
    "null": None,
    "true": True,
    "false": False,
}

# ---------------------------------------------------------------------------
# Order keywords
# ---------------------------------------------------------------------------

#: ``order`` tokens translated to SQL; anything else passes through verbatim.
NULLS_ORDERING: dict[str, str] = {
    "nullsfirst": "nulls first",
    "nullslast": "nulls last",
}

# ---------------------------------------------------------------------------
# Prefer header values
# ---------------------------------------------------------------------------


class CountMethod(str, Enum):
    """``Prefer: count=...`` values."""

    NONE = ""
    EXACT = "exact"


class ResolutionMethod(str, Enum):
    """``Prefer: resolution=...`` values (upsert strategy)."""

    NONE = ""
    IGNORE_DUPLICATES = "ignore-duplicates"
    MERGE_DUPLICATES = "merge-duplicates"
