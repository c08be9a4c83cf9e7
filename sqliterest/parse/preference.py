"""``Prefer`` header parsing.

The header is a comma-separated list of ``key=value`` pairs::

    Prefer: count=exact, resolution=merge-duplicates

Keys and values are matched case-insensitively.  Unknown keys are ignored;
an unknown value for a known key is rejected.
"""
from __future__ import annotations

import re

from sqliterest.errors import BadRequestError
from sqliterest.request.snapshot import RequestSnapshot
from sqliterest.schema.expressions import CountMethod, ResolutionMethod
from sqliterest.schema.models import Preference

PREFER_HEADER = "Prefer"

# Commas per RFC 7240; semicolons are accepted as well.
_SEPARATORS = re.compile(r"[,;]")


def parse_preference_header(raw: str) -> Preference:
    """Parse a raw ``Prefer`` value.

    Raises:
        BadRequestError: If ``count`` or ``resolution`` has an unsupported
            value.
    """
    count = CountMethod.NONE
    resolution = ResolutionMethod.NONE

    for part in _SEPARATORS.split(raw):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition("=")
        if not sep:
            continue

        key = key.lower()
        if key == "count":
            try:
                count = CountMethod(value.lower())
            except ValueError as exc:
                raise BadRequestError(f"unsupported count preference: {value}") from exc
        elif key == "resolution":
            try:
                resolution = ResolutionMethod(value.lower())
            except ValueError as exc:
                raise BadRequestError(f"unsupported resolution preference: {value}") from exc

    return Preference(count=count, resolution=resolution)


def parse_preference(request: RequestSnapshot) -> Preference:
    """Parse the ``Prefer`` header of ``request``; defaults when absent."""
    return parse_preference_header(request.header(PREFER_HEADER))
