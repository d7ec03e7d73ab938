"""
Module: books_kernel.models.ledger
Responsibility: The ledger account master -- a named account with a normal
    balance side, an opening balance and a free-text classification group.
Architecture position: Kernel > Models.  Pure value objects, no I/O.

Invariants enforced:
    - ``opening_balance`` is interpreted relative to ``side``; the balance
      engine applies the side convention, the model never re-signs it.
    - Ledgers are immutable once created.  The core reads and recomputes,
      it never writes back.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from books_kernel.utils.coercion import to_decimal, to_optional_decimal


class BalanceSide(str, Enum):
    """Normal balance side of a ledger."""

    DEBIT = "Debit"
    CREDIT = "Credit"

    @classmethod
    def parse(cls, value: Any) -> "BalanceSide":
        """
        Map an upstream side marker to a BalanceSide.

        Anything that is not a credit marker is a debit ledger, matching the
        engine rule "add when Debit, else subtract" read the other way round.
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        if text in ("credit", "cr"):
            return cls.CREDIT
        return cls.DEBIT


@dataclass(frozen=True)
class Ledger:
    """A named account."""

    ledger_id: str
    name: str
    side: BalanceSide
    opening_balance: Decimal
    group: str
    budget: Decimal | None = None

    @property
    def is_debit(self) -> bool:
        return self.side == BalanceSide.DEBIT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ledger":
        """Build a ledger from an upstream mapping (camelCase keys)."""
        return cls(
            ledger_id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            side=BalanceSide.parse(data.get("type")),
            opening_balance=to_decimal(data.get("openingBalance")),
            group=str(data.get("group") or ""),
            budget=to_optional_decimal(data.get("budget")),
        )
