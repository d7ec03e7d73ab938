"""
Inventory Pure Functions (``books_modules.inventory.helpers``).

Responsibility
--------------
Stock valuation: per-item closing quantity from purchase and sales
movements, valued at the item's reference sale price.

Architecture
------------
Layer: **Modules** -- pure helper functions.  No I/O, no session, no clock,
no database access.

Invariants
----------
- All numeric inputs and outputs use ``Decimal`` (never ``float``).
- Quantities carry no sign of their own; a Purchase line is an inflow and
  a Sales line an outflow.  Every other voucher type moves no stock.
- Every matching line of a voucher counts, not only the first.
- Negative closing stock is reported as is, never clamped.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from books_kernel.models.item import Item
from books_kernel.models.voucher import Voucher, VoucherType
from books_modules.inventory.models import InventoryValuationReport, StockValuationRow

if TYPE_CHECKING:
    from books_modules.reporting.models import ReportMetadata

ZERO = Decimal("0")


def compute_stock_movement(
    item_id: str,
    vouchers: Sequence[Voucher],
) -> tuple[Decimal, Decimal]:
    """
    Total ``(qty_in, qty_out)`` for ``item_id``.

    Postconditions:
        - ``qty_in`` sums Purchase lines, ``qty_out`` sums Sales lines.
    """
    qty_in = ZERO
    qty_out = ZERO
    for voucher in vouchers:
        if voucher.voucher_type == VoucherType.PURCHASE:
            qty_in += sum(
                (line.qty for line in voucher.items if line.item_id == item_id),
                ZERO,
            )
        elif voucher.voucher_type == VoucherType.SALES:
            qty_out += sum(
                (line.qty for line in voucher.items if line.item_id == item_id),
                ZERO,
            )
    return qty_in, qty_out


def value_item(item: Item, vouchers: Sequence[Voucher]) -> StockValuationRow:
    """Closing quantity and valuation of one item."""
    qty_in, qty_out = compute_stock_movement(item.item_id, vouchers)
    current_qty = qty_in - qty_out
    return StockValuationRow(
        item_id=item.item_id,
        name=item.name,
        category=item.category,
        unit=item.unit,
        sale_price=item.sale_price,
        qty_in=qty_in,
        qty_out=qty_out,
        current_qty=current_qty,
        valuation=current_qty * item.sale_price,
    )


def build_inventory_valuation(
    items: Sequence[Item],
    vouchers: Sequence[Voucher],
    metadata: ReportMetadata | None = None,
) -> InventoryValuationReport:
    """One row per item, in item order, plus the total valuation."""
    rows = tuple(value_item(item, vouchers) for item in items)
    return InventoryValuationReport(
        rows=rows,
        total_valuation=sum((row.valuation for row in rows), ZERO),
        metadata=metadata,
    )
