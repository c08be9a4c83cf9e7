"""Custom exception hierarchy for sqliterest.

All public errors inherit from :class:`SqliteRestError` so callers can catch
the base class for any compilation failure.  Every error carries the HTTP
status code the request layer should answer with, plus a ``message`` /
``hint`` pair that is surfaced to the client as the JSON error body.
"""
from __future__ import annotations

from typing import Any


class SqliteRestError(Exception):
    """Base exception for all sqliterest errors.

    Args:
        message: Short, stable description (e.g. ``"Bad Request"``).
        hint: Optional request-specific detail.
        code: Optional machine-readable error code.
    """

    message: str = "Internal Server Error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        hint: str | None = None,
        code: str | None = None,
    ) -> None:
        if message is not None:
            self.message = message
        self.hint = hint or ""
        self.code = code or ""
        super().__init__(self._render())

    def _render(self) -> str:
        if self.hint:
            return f"{self.message} - {self.hint}"
        return self.message

    def to_error_response(self) -> dict[str, Any]:
        """Returns the JSON error body written by the request layer."""
        body: dict[str, Any] = {"message": self.message}
        if self.code:
            body["code"] = self.code
        if self.hint:
            body["hint"] = self.hint
        return body


class BadRequestError(SqliteRestError):
    """Raised for malformed or missing input.

    Covers missing payload columns or rows, wrong row cardinality for updates,
    a missing filter on a single-entry update and unsupported ``Prefer``
    values.
    """

    message = "Bad Request"
    status_code = 400

    def __init__(self, hint: str | None = None) -> None:
        super().__init__(hint=hint)


class UnsupportedMediaTypeError(SqliteRestError):
    """Raised when the request body is not ``application/json``."""

    message = "Unsupported Media Type"
    status_code = 415

    def __init__(self, content_type: str = "") -> None:
        hint = f"content type {content_type!r} is unsupported" if content_type else None
        super().__init__(hint=hint)
        self.content_type = content_type


class UnsupportedOperatorError(SqliteRestError):
    """Raised when a filter uses an unknown operator or a malformed value.

    Args:
        operator: The raw filter token that could not be parsed
            (e.g. ``"foo.1"`` or ``"is.maybe"``).
    """

    message = "Unsupported Operator"
    status_code = 400

    def __init__(self, operator: str) -> None:
        super().__init__(hint=f'operator "{operator}" is unsupported')
        self.operator = operator


class OrderFormatError(SqliteRestError):
    """Raised when the ``order`` parameter has more than three parts."""

    message = "Invalid Order Clause"
    status_code = 400

    def __init__(self, clause: str) -> None:
        super().__init__(hint=f"invalid order by clause: {clause}")
        self.clause = clause


class PayloadDecodeError(SqliteRestError):
    """Raised when a JSON body or an ``in`` list cannot be decoded.

    Args:
        source: What was being decoded (``"body"`` or ``"in"``).
        detail: The decoder's own description of the problem.
    """

    message = "Malformed JSON"
    status_code = 400

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(hint=f"{source}: {detail}")
        self.source = source
        self.detail = detail


class DisallowedColumnError(BadRequestError):
    """Raised when an ``on_conflict`` column is not an allowed identifier.

    Args:
        table: Target table of the insert.
        column: The rejected column name, verbatim.
        allowed_columns: Columns the conflict target may reference, empty
            when no schema snapshot is configured.
    """

    def __init__(self, table: str, column: str, allowed_columns: list[str]) -> None:
        super().__init__(f"column {column!r} is not a valid conflict target on {table!r}")
        self.code = "DISALLOWED_COLUMN"
        self.table = table
        self.column = column
        self.allowed_columns = allowed_columns
