"""
Inventory Module.

Stock valuation derived from voucher line items: Purchase lines add
stock, Sales lines remove it, and closing stock is valued at the item's
sale price.
"""

from books_modules.inventory.helpers import (
    build_inventory_valuation,
    compute_stock_movement,
    value_item,
)
from books_modules.inventory.models import InventoryValuationReport, StockValuationRow

__all__ = [
    "InventoryValuationReport",
    "StockValuationRow",
    "build_inventory_valuation",
    "compute_stock_movement",
    "value_item",
]
