"""Immutable view of one inbound HTTP request.

The compiler never touches the HTTP framework directly.  The request layer
captures the routed table name, the query parameters, the relevant headers
and the body into a :class:`RequestSnapshot`; every parser then reads from
that snapshot.

The body is read exactly once, at capture time, into a ``bytes`` buffer.
Preference parsing and payload decoding both inspect the same request, and
neither of them ever consumes a stream.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import IO, Union
from urllib.parse import parse_qsl

#: Query-parameter names with special meaning; never parsed as filters.
RESERVED_KEYS: frozenset[str] = frozenset(
    {"select", "order", "limit", "offset", "on_conflict"}
)

QueryInput = Union[str, Mapping[str, Union[str, Iterable[str]]], Iterable[tuple[str, str]], None]
BodyInput = Union[bytes, str, IO[bytes], None]


def is_reserved_key(name: str) -> bool:
    """Return ``True`` if ``name`` is a reserved (non-filter) query key."""
    return name.lower() in RESERVED_KEYS


@dataclass(frozen=True)
class RequestSnapshot:
    """Request descriptor consumed by the statement compiler.

    Attributes:
        table: The already-routed target table or view name.
        query: Query parameters as ``(key, value)`` pairs in request order.
            Repeated keys are kept.
        headers: Header names lower-cased, mapped to their value.
        body: The request body, read once.
    """

    table: str
    query: tuple[tuple[str, str], ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def __post_init__(self) -> None:
        # Lower-case header names however the snapshot was built.
        object.__setattr__(
            self, "headers", {k.lower(): v for k, v in self.headers.items()}
        )

    @classmethod
    def capture(
        cls,
        table: str,
        query: QueryInput = None,
        headers: Mapping[str, str] | None = None,
        body: BodyInput = None,
    ) -> RequestSnapshot:
        """Build a snapshot from loosely-typed request parts.

        Args:
            table: Target table or view name.
            query: A raw query string (``"id=eq.1&order=id"``), a mapping
                whose values are strings or lists of strings, or a sequence
                of ``(key, value)`` pairs.
            headers: Request headers; names are matched case-insensitively.
            body: ``bytes``, ``str``, ``None`` or a readable binary stream.
                A stream is drained and closed here.

        Returns:
            A frozen :class:`RequestSnapshot`.
        """
        return cls(
            table=table,
            query=_normalize_query(query),
            headers=dict(headers or {}),
            body=_read_body(body),
        )

    def query_values(self, name: str) -> list[str]:
        """Return every value given for ``name``, in request order."""
        return [v for k, v in self.query if k == name]

    def query_value(self, name: str) -> str:
        """Return the first value given for ``name``, or ``""``."""
        for k, v in self.query:
            if k == name:
                return v
        return ""

    def header(self, name: str) -> str:
        """Return the header value for ``name`` (case-insensitive), or ``""``."""
        return self.headers.get(name.lower(), "")

    def filter_keys(self) -> list[str]:
        """Return the distinct filterable query keys in first-seen order."""
        seen: dict[str, None] = {}
        for k, _ in self.query:
            if not is_reserved_key(k):
                seen.setdefault(k, None)
        return list(seen)


def _normalize_query(query: QueryInput) -> tuple[tuple[str, str], ...]:
    if query is None:
        return ()
    if isinstance(query, str):
        return tuple(parse_qsl(query.lstrip("?"), keep_blank_values=True))
    if isinstance(query, Mapping):
        pairs: list[tuple[str, str]] = []
        for k, v in query.items():
            if isinstance(v, str):
                pairs.append((k, v))
            else:
                pairs.extend((k, item) for item in v)
        return tuple(pairs)
    return tuple((k, v) for k, v in query)


def _read_body(body: BodyInput) -> bytes:
    if body is None:
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    try:
        return body.read()
    finally:
        body.close()
