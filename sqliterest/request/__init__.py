"""sqliterest request layer: the immutable request snapshot."""
from sqliterest.request.snapshot import RESERVED_KEYS, RequestSnapshot, is_reserved_key

__all__ = ["RESERVED_KEYS", "RequestSnapshot", "is_reserved_key"]
