"""Utility modules for the books kernel."""

from books_kernel.utils.coercion import (
    ZERO,
    to_calendar_date,
    to_decimal,
    to_optional_decimal,
)
from books_kernel.utils.hashing import (
    canonicalize_json,
    hash_audit_event,
    hash_payload,
)

__all__ = [
    "ZERO",
    "to_decimal",
    "to_optional_decimal",
    "to_calendar_date",
    "canonicalize_json",
    "hash_payload",
    "hash_audit_event",
]
