"""``Content-Range`` / ``Range-Unit`` response header formatting."""
from __future__ import annotations

from sqliterest.schema.models import Pagination

RANGE_UNIT_HEADER = "Range-Unit"
CONTENT_RANGE_HEADER = "Content-Range"
RANGE_UNIT = "items"
UNKNOWN_TOTAL = "*"


def format_content_range(pagination: Pagination | None, total: str) -> str:
    """Render a Content-Range value.

    Args:
        pagination: Resolved pagination, or ``None``.
        total: Total row count as a string, or ``"*"`` when unknown.

    Returns:
        ``""`` without pagination, ``"<offset>-/<total>"`` for an unbounded
        limit, otherwise ``"<offset>-<last>/<total>"``.
    """
    if pagination is None:
        return ""
    if pagination.unbounded:
        return f"{pagination.offset}-/{total}"
    last = pagination.offset + pagination.limit - 1
    return f"{pagination.offset}-{last}/{total}"
