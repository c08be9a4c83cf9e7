"""Payload decoding: JSON request body -> :class:`InputPayload`.

Only ``application/json`` bodies are accepted.  The ``Content-Type`` header
may list several comma-separated candidates; the first one that parses as
``application/json`` wins.

A body starting with ``[`` is decoded as an array of objects, anything else
as a single object wrapped into a one-row payload.
"""
from __future__ import annotations

import json
import logging
from email.message import Message
from typing import Any

from sqliterest.errors import PayloadDecodeError, UnsupportedMediaTypeError
from sqliterest.request.snapshot import RequestSnapshot
from sqliterest.schema.models import InputPayload

logger = logging.getLogger(__name__)

CONTENT_TYPE_HEADER = "Content-Type"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
JSON_MEDIA_TYPE = "application/json"


def media_type(candidate: str) -> str:
    """Return the lower-cased ``type/subtype`` of one Content-Type value.

    Parameters such as ``charset`` are dropped.  Values that do not parse
    as a media type come back as ``text/plain``.
    """
    msg = Message()
    msg["content-type"] = candidate.strip()
    return msg.get_content_type()


def accepts_json(content_type: str) -> bool:
    """Return ``True`` if any candidate in ``content_type`` is JSON."""
    return any(media_type(c) == JSON_MEDIA_TYPE for c in content_type.split(","))


def decode_json_rows(body: bytes) -> list[dict[str, Any]]:
    """Decode a JSON object or array of objects into a list of rows.

    Raises:
        PayloadDecodeError: If the body is not valid JSON, or is not an
            object / an array of objects.
    """
    try:
        text = body.decode("utf-8")
        decoded = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise PayloadDecodeError("body", str(exc)) from exc

    if text.lstrip().startswith("["):
        if not all(isinstance(row, dict) for row in decoded):
            raise PayloadDecodeError("body", "expected an array of objects")
        return decoded

    if not isinstance(decoded, dict):
        raise PayloadDecodeError("body", "expected an object or an array of objects")
    return [decoded]


def decode_payload(request: RequestSnapshot) -> InputPayload:
    """Decode the body of ``request``.

    Reads the snapshot's pre-read body buffer, so it may be called any
    number of times for the same request.

    Raises:
        UnsupportedMediaTypeError: If no Content-Type candidate is JSON.
        PayloadDecodeError: If the JSON body is malformed.
    """
    content_type = request.header(CONTENT_TYPE_HEADER) or DEFAULT_CONTENT_TYPE
    if not accepts_json(content_type):
        logger.debug("rejected body with content type %r", content_type)
        raise UnsupportedMediaTypeError(content_type)

    return InputPayload.from_rows(decode_json_rows(request.body))
