"""
Coercion -- loosely typed upstream data into domain values.

Responsibility:
    Converts the numbers and date strings produced by the workspace UI
    (JSON numbers, numeric strings, ISO dates) into ``Decimal`` and
    ``date`` values for the frozen models.

Architecture position:
    Kernel > Utils -- pure functions, zero I/O.  Used only by the
    ``from_dict`` factories in ``books_kernel.models``.

Invariants enforced:
    - Monetary and quantity values are ``Decimal`` -- NEVER ``float``.
      Floats go through ``str()`` first so 0.1 stays 0.1.
    - Every ``Decimal`` handed out is finite.
    - Malformed dates never raise: they become ``None`` and such vouchers
      simply fall outside every period.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")


def _parse_finite(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    else:
        try:
            parsed = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    # NaN and Infinity poison every sum they enter.
    return parsed if parsed.is_finite() else None


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """
    Convert a number-like value to ``Decimal``.

    ``None``, unparsable and non-finite values (NaN, Infinity) yield
    ``default``.  Booleans are not numbers here and also yield ``default``.
    """
    parsed = _parse_finite(value)
    return default if parsed is None else parsed


def to_optional_decimal(value: Any) -> Decimal | None:
    """Like ``to_decimal`` but absence (or garbage) stays ``None``."""
    if value == "":
        return None
    return _parse_finite(value)


def to_calendar_date(value: Any) -> date | None:
    """
    Reduce a date-like value to a calendar date.

    Accepts ``date``, ``datetime`` (time-of-day dropped) and ISO-8601
    strings with or without a time part.  Anything else yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None
