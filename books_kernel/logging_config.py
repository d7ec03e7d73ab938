"""
Structured JSON logging for the books kernel.

Every line is one JSON object::

    {"ts": "...", "level": "INFO", "logger": "books_kernel.modules.reporting.service",
     "event": "report_generated", "company_id": "C1", "report_type": "cash_flow",
     "kind": "cash_flow"}

``event`` is the snake_case name passed to the logger call, the
``LogContext`` fields of the current report or workflow follow, then the
call's ``extra`` payload.  Money goes out as the ``Decimal`` string, dates
as ISO-8601 and report kinds as their enum value.
"""

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator

_LOGGER_PREFIX = "books_kernel"


class LogContext:
    """
    Context-var fields merged into every log line.

    ``company_id`` and ``report_type`` are bound by the reporting service
    for the duration of one report; ``actor_id`` and ``correlation_id``
    by whichever workflow drives the audit trail.
    """

    FIELDS = ("correlation_id", "company_id", "actor_id", "report_type")

    _vars: dict[str, ContextVar[str | None]] = {
        name: ContextVar(f"books_log_{name}", default=None) for name in FIELDS
    }

    @classmethod
    def _var(cls, name: str) -> ContextVar[str | None]:
        try:
            return cls._vars[name]
        except KeyError:
            raise TypeError(f"Unknown log context field: {name}") from None

    @classmethod
    def set(cls, **fields: str | None) -> None:
        """Set the given fields; ``None`` leaves a field untouched."""
        for name, value in fields.items():
            var = cls._var(name)
            if value is not None:
                var.set(value)

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return {
            name: value
            for name, var in cls._vars.items()
            if (value := var.get()) is not None
        }

    @classmethod
    def clear(cls) -> None:
        for var in cls._vars.values():
            var.set(None)

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[None]:
        """Set fields for the duration of a block, then restore them."""
        tokens = []
        for name, value in fields.items():
            var = cls._var(name)
            if value is not None:
                tokens.append((var, var.set(value)))
        try:
            yield
        finally:
            for var, token in reversed(tokens):
                var.reset(token)


# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return str(value)


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(LogContext.get_all())
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in payload:
                payload[key] = value

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            payload["error_type"] = type(error).__name__
            payload["error"] = str(error)
            code = getattr(error, "code", None)
            if code is not None:
                payload["error_code"] = code
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the books_kernel namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """
    Attach one JSON handler to the books_kernel logger.

    Only the first call has an effect.  The logger does not propagate, so
    an application's root handlers never see duplicate lines.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    books_logger = logging.getLogger(_LOGGER_PREFIX)
    books_logger.setLevel(level)
    books_logger.propagate = False

    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    books_logger.addHandler(handler)


def reset_logging() -> None:
    """Drop the handler so the next ``configure_logging`` call applies. Tests only."""
    global _configured
    with _lock:
        _configured = False
    books_logger = logging.getLogger(_LOGGER_PREFIX)
    books_logger.handlers.clear()
    books_logger.setLevel(logging.WARNING)
