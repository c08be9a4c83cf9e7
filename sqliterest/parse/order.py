"""Order clause parsing: ``order=<col>[.<asc|desc>][.<nullsfirst|nullslast>]``."""
from __future__ import annotations

from sqliterest.errors import OrderFormatError
from sqliterest.request.snapshot import RequestSnapshot
from sqliterest.schema.expressions import NULLS_ORDERING
from sqliterest.schema.models import OrderSpec

ORDER_KEY = "order"


def _translate(token: str) -> str:
    return NULLS_ORDERING.get(token, token)


def parse_order(raw: str) -> list[OrderSpec]:
    """Parse an ``order`` parameter value.

    ``a.asc`` -> ``a asc``; ``a.nullslast`` -> ``a nulls last``;
    ``a.desc.nullsfirst`` -> ``a desc nulls first``.  Tokens other than the
    two nulls orderings are passed through verbatim.

    Raises:
        OrderFormatError: If an item has more than three dot-separated parts.
    """
    if raw == "":
        return []

    specs: list[OrderSpec] = []
    for item in raw.split(","):
        parts = item.split(".")
        if len(parts) == 1:
            specs.append(OrderSpec(column=parts[0]))
        elif len(parts) == 2:
            specs.append(OrderSpec(column=parts[0], direction=_translate(parts[1])))
        elif len(parts) == 3:
            specs.append(
                OrderSpec(column=parts[0], direction=parts[1], nulls=_translate(parts[2]))
            )
        else:
            raise OrderFormatError(item)
    return specs


def parse_request_order(request: RequestSnapshot) -> list[OrderSpec]:
    """Parse the ``order`` parameter of ``request`` (first value wins)."""
    return parse_order(request.query_value(ORDER_KEY))
