"""
Financial Reporting Domain Models (``books_modules.reporting.models``).

Responsibility
--------------
Frozen dataclass value objects representing report outputs: trial
balance, balance sheet, profit & loss, cash flow, day book, bank
reconciliation and the data integrity scan.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``ReportingService`` and returned to callers.  Report outputs are never
persisted; they are recomputed on every request.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Balance sheet rows are tagged variants (``AssetEntry`` or
  ``LiabilityEntry``), never loosely typed records.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from books_kernel.domain.period import DateRange
from books_kernel.exceptions import UnknownReportTypeError
from books_kernel.models.ledger import BalanceSide
from books_kernel.models.voucher import Voucher


# =========================================================================
# Enums
# =========================================================================


class ReportKind(str, Enum):
    """The report selector.  Passed explicitly, never held as shared state."""

    TRIAL_BALANCE = "trial_balance"
    BALANCE_SHEET = "balance_sheet"
    PROFIT_AND_LOSS = "profit_and_loss"
    CASH_FLOW = "cash_flow"
    INVENTORY_SUMMARY = "inventory_summary"
    GST_REPORTS = "gst_reports"
    DAY_BOOK = "day_book"
    INTEGRITY_CHECK = "integrity_check"
    BANK_RECONCILIATION = "bank_reconciliation"
    TAX_LIABILITY = "tax_liability"

    @classmethod
    def parse(cls, value: "ReportKind | str") -> "ReportKind":
        """
        Resolve a selector string.

        Raises:
            UnknownReportTypeError: ``value`` names no known report.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownReportTypeError(
                str(value), tuple(k.value for k in cls),
            ) from None


class TrialBalanceStatus(str, Enum):
    """Equilibrium state of a trial balance (the variance banner)."""

    BALANCED = "balanced"
    VARIANCE = "variance"


class LiquidityState(str, Enum):
    """Cash position over the reporting window."""

    SURPLUS = "surplus"
    DEFICIT = "deficit"


# =========================================================================
# Report Metadata (common to all reports)
# =========================================================================


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to every report."""

    kind: ReportKind
    entity_name: str
    currency: str
    generated_at: str  # ISO format timestamp from injected clock
    period: DateRange | None = None

    @property
    def period_label(self) -> str:
        return self.period.label if self.period is not None else "All periods"


# =========================================================================
# Trial Balance
# =========================================================================


@dataclass(frozen=True)
class TrialBalanceLine:
    """One ledger row: its balance split into a Dr or Cr column."""

    ledger_id: str
    name: str
    group: str
    side: BalanceSide
    balance: Decimal
    dr: Decimal
    cr: Decimal


@dataclass(frozen=True)
class TrialBalanceReport:
    """
    Trial balance.  ``is_balanced`` uses exact equality.

    An unbalanced trial balance is a reported state, never an exception.
    """

    metadata: ReportMetadata
    lines: tuple[TrialBalanceLine, ...]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool
    variance: Decimal  # total_debit - total_credit
    status: TrialBalanceStatus


# =========================================================================
# Balance Sheet
# =========================================================================


@dataclass(frozen=True)
class AssetEntry:
    """A ledger whose group matched an asset keyword."""

    ledger_id: str
    name: str
    group: str
    balance: Decimal
    section: str  # "Fixed Assets" or "Current Assets"


@dataclass(frozen=True)
class LiabilityEntry:
    """Any ledger that is not an asset: liabilities and capital."""

    ledger_id: str
    name: str
    group: str
    balance: Decimal
    section: str  # "Capital & Reserves", "Long-term Liabilities", ...


BalanceSheetEntry = AssetEntry | LiabilityEntry


@dataclass(frozen=True)
class BalanceSheetSection:
    """A presentation section of the balance sheet."""

    label: str
    entries: tuple[BalanceSheetEntry, ...]
    total: Decimal


@dataclass(frozen=True)
class BalanceSheetReport:
    """
    Balance sheet.

    ``is_balanced`` is advisory.  Unlike the trial balance, the balance
    sheet carries no status; callers read ``differential`` instead.
    """

    metadata: ReportMetadata
    assets: tuple[AssetEntry, ...]
    liabilities: tuple[LiabilityEntry, ...]
    asset_sections: tuple[BalanceSheetSection, ...]
    liability_sections: tuple[BalanceSheetSection, ...]
    total_assets: Decimal
    total_liab: Decimal
    differential: Decimal  # abs(total_assets - total_liab)
    is_balanced: bool


# =========================================================================
# Profit & Loss
# =========================================================================


@dataclass(frozen=True)
class ProfitAndLossReport:
    """Voucher-type aggregate P&L.  No ledger lookup is involved."""

    metadata: ReportMetadata
    sales: Decimal
    receipts: Decimal
    purchases: Decimal
    payments: Decimal
    income: Decimal  # sales + receipts
    expenses: Decimal  # purchases + payments
    gross_profit: Decimal  # sales - purchases
    net_profit: Decimal  # income - expenses

    @property
    def is_profit(self) -> bool:
        return self.net_profit >= 0


# =========================================================================
# Cash Flow
# =========================================================================


@dataclass(frozen=True)
class CashFlowReport:
    """Receipts against payments."""

    metadata: ReportMetadata
    inflows: Decimal
    outflows: Decimal
    net: Decimal
    liquidity: LiquidityState
    receipt_count: int
    payment_count: int


# =========================================================================
# Day Book
# =========================================================================


@dataclass(frozen=True)
class DayBookReport:
    """Chronological voucher register, optionally searched and filtered."""

    metadata: ReportMetadata
    entries: tuple[Voucher, ...]
    count: int
    gross: Decimal
    search: str = ""
    voucher_type: str | None = None


# =========================================================================
# Bank Reconciliation
# =========================================================================


@dataclass(frozen=True)
class BankReconciliationLine:
    """One bank-touching voucher awaiting (or past) reconciliation."""

    voucher_id: str
    voucher_date: date | None
    voucher_type: str
    party: str
    reference: str | None
    withdrawal: Decimal
    deposit: Decimal
    is_reconciled: bool
    bank_date: date | None


@dataclass(frozen=True)
class BankReconciliationReport:
    """Balance as per books against balance as per bank."""

    metadata: ReportMetadata
    bank_ledger_id: str
    bank_ledger_name: str
    book_balance: Decimal
    bank_balance: Decimal
    difference: Decimal  # book_balance - bank_balance
    lines: tuple[BankReconciliationLine, ...]

    @property
    def is_reconciled(self) -> bool:
        return self.difference == 0


# =========================================================================
# Integrity Scan
# =========================================================================


@dataclass(frozen=True)
class IntegrityReport:
    """
    Data quality findings.  Findings are reported, never enforced:
    the scan neither raises nor filters vouchers out of other reports.
    """

    metadata: ReportMetadata
    ledger_count: int
    voucher_count: int
    orphan_ledger_refs: tuple[str, ...]
    negative_amounts: tuple[str, ...]
    amount_mismatches: tuple[str, ...]
    trial_balance_balanced: bool
    is_clean: bool
