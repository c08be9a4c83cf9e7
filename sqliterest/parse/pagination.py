"""Pagination resolution from the ``Range`` header or ``limit``/``offset``.

Precedence: a ``Range: <start>-[<end>]`` header (zero-based, inclusive end)
overrides the ``limit`` and ``offset`` query parameters.  When neither is
present there is no pagination at all.
"""
from __future__ import annotations

import re

from sqliterest.errors import BadRequestError
from sqliterest.request.snapshot import RequestSnapshot
from sqliterest.schema.models import UNBOUNDED, Pagination

RANGE_HEADER = "Range"
LIMIT_KEY = "limit"
OFFSET_KEY = "offset"

# Optional sign followed by ASCII decimal digits.
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(raw: str, what: str) -> int:
    if not _INTEGER.fullmatch(raw):
        raise BadRequestError(f"invalid {what}: {raw!r}")
    return int(raw, 10)


def pagination_from_range(raw: str) -> Pagination | None:
    """Parse a ``Range`` header value.

    ``"3-5"`` -> limit 3, offset 3.  ``"7-"`` -> unbounded limit, offset 7.

    Raises:
        BadRequestError: If the value is not ``<int>-[<int>]`` or the end
            precedes the start.
    """
    if raw == "":
        return None
    start_raw, sep, end_raw = raw.partition("-")
    if not sep:
        raise BadRequestError(f"invalid range: {raw!r}")

    offset = _parse_int(start_raw, "range")
    if end_raw == "":
        return Pagination(limit=UNBOUNDED, offset=offset)

    end = _parse_int(end_raw, "range")
    if end < offset:
        raise BadRequestError(f"invalid range: {raw!r}")
    return Pagination(limit=end - offset + 1, offset=offset)


def pagination_from_query(request: RequestSnapshot) -> Pagination | None:
    """Read ``limit`` (required) and ``offset`` (optional, default 0)."""
    limit_raw = request.query_value(LIMIT_KEY)
    if limit_raw == "":
        return None
    limit = _parse_int(limit_raw, LIMIT_KEY)

    offset_raw = request.query_value(OFFSET_KEY)
    offset = _parse_int(offset_raw, OFFSET_KEY) if offset_raw != "" else 0
    return Pagination(limit=limit, offset=offset)


def resolve_pagination(request: RequestSnapshot) -> Pagination | None:
    """Resolve pagination for ``request``; ``None`` when absent."""
    from_header = pagination_from_range(request.header(RANGE_HEADER))
    if from_header is not None:
        return from_header
    return pagination_from_query(request)
