"""
Inventory Domain Models.

Stock valuation output: one row per item master and the report total.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from books_modules.reporting.models import ReportMetadata


@dataclass(frozen=True)
class StockValuationRow:
    """Closing quantity of one item valued at its sale price."""

    item_id: str
    name: str
    category: str
    unit: str
    sale_price: Decimal
    qty_in: Decimal  # Purchase lines
    qty_out: Decimal  # Sales lines
    current_qty: Decimal  # qty_in - qty_out, may be negative
    valuation: Decimal  # current_qty * sale_price

    @property
    def is_negative_stock(self) -> bool:
        return self.current_qty < 0


@dataclass(frozen=True)
class InventoryValuationReport:
    """Stock summary across every item master."""

    rows: tuple[StockValuationRow, ...]
    total_valuation: Decimal
    metadata: ReportMetadata | None = None

    @property
    def negative_stock_items(self) -> tuple[str, ...]:
        return tuple(row.item_id for row in self.rows if row.is_negative_stock)
