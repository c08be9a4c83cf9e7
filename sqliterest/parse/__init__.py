"""sqliterest parsing layer: request grammar -> parsed models."""
from sqliterest.parse.filters import parse_filter, parse_filters
from sqliterest.parse.operators import OPERATORS, supported_operators
from sqliterest.parse.order import parse_order, parse_request_order
from sqliterest.parse.pagination import resolve_pagination
from sqliterest.parse.payload import decode_payload
from sqliterest.parse.preference import parse_preference, parse_preference_header

__all__ = [
    "OPERATORS",
    "decode_payload",
    "parse_filter",
    "parse_filters",
    "parse_order",
    "parse_preference",
    "parse_preference_header",
    "parse_request_order",
    "resolve_pagination",
    "supported_operators",
]
