"""
Module: books_kernel.models.voucher
Responsibility: Immutable transaction records ("vouchers") and their line
    items and ledger legs.
Architecture position: Kernel > Models.  Pure value objects, no I/O.

Invariants enforced:
    - Vouchers are never mutated or deleted by the core.
    - The defaulting rules for optional numbers are expressed exactly once:
        taxable value = sub_total if present else amount
        tax amount    = tax_total if present else 0
        line tax      = tax_amount if present else 0
    - ``voucher_type``, ``supply_type`` and ``gst_classification`` keep the
      raw upstream strings.  Report code compares them by equality against
      the enums below, so unknown values never raise; they just match no
      bucket.

Failure modes:
    - None.  ``from_dict`` coerces garbage to defaults (see
      ``books_kernel.utils.coercion``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from books_kernel.utils.coercion import (
    ZERO,
    to_calendar_date,
    to_decimal,
    to_optional_decimal,
)


class VoucherType(str, Enum):
    """Known voucher types.  Vouchers may carry others."""

    SALES = "Sales"
    PURCHASE = "Purchase"
    SALES_RETURN = "Sales Return"
    PURCHASE_RETURN = "Purchase Return"
    PAYMENT = "Payment"
    RECEIPT = "Receipt"
    JOURNAL = "Journal"
    CONTRA = "Contra"
    DELIVERY_NOTE = "Delivery Note"
    GOODS_RECEIPT_NOTE = "Goods Receipt Note (GRN)"
    STOCK_ADJUSTMENT = "Stock Adjustment"
    PURCHASE_ORDER = "Purchase Order"


class SupplyType(str, Enum):
    """Locality of a supply: intra-region or inter-region."""

    LOCAL = "Local"
    INTERSTATE = "Interstate"

    @classmethod
    def normalize(cls, value: Any) -> str | None:
        """Map the legacy "Central" spelling to Interstate; keep the rest."""
        if value is None:
            return None
        text = str(value)
        if text == "Central":
            return cls.INTERSTATE.value
        return text


class GstClassification(str, Enum):
    """Supply direction for tax purposes."""

    OUTPUT = "Output"
    INPUT = "Input"


@dataclass(frozen=True)
class LedgerEntry:
    """One leg of a multi-ledger voucher."""

    ledger_id: str
    ledger_name: str
    side: str  # "Dr" or "Cr"
    amount: Decimal

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LedgerEntry":
        return cls(
            ledger_id=str(data.get("ledgerId", "")),
            ledger_name=str(data.get("ledgerName", "")),
            side=str(data.get("type", "Dr")),
            amount=to_decimal(data.get("amount")),
        )


@dataclass(frozen=True)
class LineItem:
    """
    A commodity line on a voucher.

    Quantity carries no sign of its own; the parent voucher's type decides
    whether it is an inflow (Purchase) or an outflow (Sales).
    """

    line_id: str
    item_id: str
    name: str
    qty: Decimal
    amount: Decimal
    hsn: str | None = None
    unit: str | None = None
    rate: Decimal = ZERO
    tax_amount: Decimal | None = None
    cgst_rate: Decimal | None = None
    sgst_rate: Decimal | None = None
    igst_rate: Decimal | None = None

    @property
    def line_tax(self) -> Decimal:
        """Tax on this line, defaulting to zero when absent."""
        return self.tax_amount if self.tax_amount is not None else ZERO

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItem":
        return cls(
            line_id=str(data.get("id", "")),
            item_id=str(data.get("itemId", "")),
            name=str(data.get("name", "")),
            qty=to_decimal(data.get("qty")),
            amount=to_decimal(data.get("amount")),
            hsn=data.get("hsn") or None,
            unit=data.get("unit") or None,
            rate=to_decimal(data.get("rate")),
            tax_amount=to_optional_decimal(data.get("taxAmount")),
            cgst_rate=to_optional_decimal(data.get("cgstRate")),
            sgst_rate=to_optional_decimal(data.get("sgstRate")),
            igst_rate=to_optional_decimal(data.get("igstRate")),
        )


@dataclass(frozen=True)
class Voucher:
    """
    An immutable recorded transaction.

    ``amount`` is the unsigned gross value.  A voucher without ``ledger_id``
    does not move any ledger balance but still counts in type-keyed
    aggregates (P&L, Cash Flow, tax).
    """

    voucher_id: str
    voucher_type: str
    voucher_date: date | None
    amount: Decimal
    ledger_id: str | None = None
    sub_total: Decimal | None = None
    tax_total: Decimal | None = None
    party: str = ""
    supply_type: str | None = None
    gst_classification: str | None = None
    items: tuple[LineItem, ...] = ()
    entries: tuple[LedgerEntry, ...] = ()
    status: str = "Posted"
    narration: str | None = None
    reference: str | None = None
    is_reconciled: bool = False
    bank_date: date | None = None

    @property
    def taxable_value(self) -> Decimal:
        """Pre-tax value: ``sub_total`` when present, else ``amount``."""
        return self.sub_total if self.sub_total is not None else self.amount

    @property
    def tax_amount(self) -> Decimal:
        """Tax component: ``tax_total`` when present, else zero."""
        return self.tax_total if self.tax_total is not None else ZERO

    @property
    def is_local_supply(self) -> bool:
        return self.supply_type == SupplyType.LOCAL

    def touches_ledger(self, ledger_id: str) -> bool:
        """True when the voucher posts against ``ledger_id`` on any leg."""
        if self.ledger_id == ledger_id:
            return True
        return any(entry.ledger_id == ledger_id for entry in self.entries)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Voucher":
        """Build a voucher from an upstream mapping (camelCase keys)."""
        ledger_id = data.get("ledgerId")
        return cls(
            voucher_id=str(data.get("id", "")),
            voucher_type=str(data.get("type", "")),
            voucher_date=to_calendar_date(data.get("date")),
            amount=to_decimal(data.get("amount")),
            ledger_id=str(ledger_id) if ledger_id else None,
            sub_total=to_optional_decimal(data.get("subTotal")),
            tax_total=to_optional_decimal(data.get("taxTotal")),
            party=str(data.get("party") or ""),
            supply_type=SupplyType.normalize(data.get("supplyType")),
            gst_classification=data.get("gstClassification"),
            items=tuple(LineItem.from_dict(i) for i in data.get("items") or ()),
            entries=tuple(
                LedgerEntry.from_dict(e) for e in data.get("entries") or ()
            ),
            status=str(data.get("status") or "Posted"),
            narration=data.get("narration"),
            reference=data.get("reference"),
            is_reconciled=bool(data.get("isReconciled", False)),
            bank_date=to_calendar_date(data.get("bankDate")),
        )
