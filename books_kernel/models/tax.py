"""
Module: books_kernel.models.tax
Responsibility: Tax and tax-group masters.
Architecture position: Kernel > Models.  Pure value objects, no I/O.

These masters are descriptive only.  Tax arithmetic reads the voucher's
own ``tax_total`` and line ``tax_amount``; it never looks up a rate here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from books_kernel.utils.coercion import to_decimal
from books_kernel.models.voucher import SupplyType


@dataclass(frozen=True)
class TaxGroup:
    """A named grouping of tax masters."""

    group_id: str
    name: str
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaxGroup":
        return cls(
            group_id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Tax:
    """A tax master such as "Output CGST @ 9%"."""

    tax_id: str
    name: str
    rate: Decimal
    tax_type: str  # CGST, SGST, IGST, ...
    classification: str  # Input / Output
    supply_type: str | None
    group_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tax":
        return cls(
            tax_id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            rate=to_decimal(data.get("rate")),
            tax_type=str(data.get("type") or ""),
            classification=str(data.get("classification") or ""),
            supply_type=SupplyType.normalize(data.get("supplyType")),
            group_id=data.get("groupId"),
        )
