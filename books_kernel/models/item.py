"""
Module: books_kernel.models.item
Responsibility: The commodity master referenced by voucher line items.
Architecture position: Kernel > Models.  Pure value objects, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from books_kernel.utils.coercion import ZERO, to_decimal


@dataclass(frozen=True)
class Item:
    """A stock item; ``sale_price`` is the reference price for valuation."""

    item_id: str
    name: str
    category: str
    unit: str
    sale_price: Decimal
    hsn_code: str = ""
    gst_rate: Decimal = ZERO
    tax_group_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        return cls(
            item_id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            category=str(data.get("category") or ""),
            unit=str(data.get("unit") or ""),
            sale_price=to_decimal(data.get("salePrice")),
            hsn_code=str(data.get("hsnCode") or ""),
            gst_rate=to_decimal(data.get("gstRate")),
            tax_group_id=data.get("taxGroupId"),
        )
