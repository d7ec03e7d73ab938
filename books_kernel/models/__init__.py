"""Domain models for the books kernel."""

from books_kernel.models.audit_event import AuditAction, AuditEntityType, AuditEvent
from books_kernel.models.company import Company
from books_kernel.models.item import Item
from books_kernel.models.ledger import BalanceSide, Ledger
from books_kernel.models.snapshot import BooksSnapshot
from books_kernel.models.tax import Tax, TaxGroup
from books_kernel.models.voucher import (
    GstClassification,
    LedgerEntry,
    LineItem,
    SupplyType,
    Voucher,
    VoucherType,
)

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "AuditEvent",
    "BalanceSide",
    "BooksSnapshot",
    "Company",
    "GstClassification",
    "Item",
    "Ledger",
    "LedgerEntry",
    "LineItem",
    "SupplyType",
    "Tax",
    "TaxGroup",
    "Voucher",
    "VoucherType",
]
