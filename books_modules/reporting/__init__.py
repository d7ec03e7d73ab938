"""
Reporting Module (``books_modules.reporting``).

Responsibility
--------------
Read-only module that derives reports from a books snapshot: trial
balance, balance sheet, profit & loss, cash flow, day book, bank
reconciliation and the integrity scan, plus tabular and structured
export of every report.

Architecture position
---------------------
**Modules layer** -- all statement generation is implemented as pure
functions in ``statements.py``; ``ReportingService`` only builds metadata,
dispatches on the report selector and logs.

Invariants enforced
-------------------
* No ledger or voucher is ever written by this module.
* Reports are recomputed from the full snapshot on every call.
* The trial balance flags variance; the balance sheet only reports its
  differential.  The two reports keep different validation strictness.

Failure modes
-------------
* Unknown report selector -> ``UnknownReportTypeError``.
* Unknown export format -> ``UnsupportedExportFormatError``.
"""

from books_modules.reporting.config import ReportingConfig
from books_modules.reporting.export import (
    ExportFormat,
    export_report,
    to_csv,
    to_document,
    to_json,
    to_table,
)
from books_modules.reporting.models import (
    AssetEntry,
    BalanceSheetEntry,
    BalanceSheetReport,
    BalanceSheetSection,
    BankReconciliationLine,
    BankReconciliationReport,
    CashFlowReport,
    DayBookReport,
    IntegrityReport,
    LiabilityEntry,
    LiquidityState,
    ProfitAndLossReport,
    ReportKind,
    ReportMetadata,
    TrialBalanceLine,
    TrialBalanceReport,
    TrialBalanceStatus,
)
from books_modules.reporting.service import ReportingService
from books_modules.reporting.statements import (
    build_balance_sheet,
    build_bank_reconciliation,
    build_cash_flow,
    build_day_book,
    build_profit_and_loss,
    build_trial_balance,
    render_to_dict,
    scan_integrity,
)

__all__ = [
    "ReportingConfig",
    "ReportingService",
    "ReportKind",
    "ReportMetadata",
    "TrialBalanceLine",
    "TrialBalanceReport",
    "TrialBalanceStatus",
    "AssetEntry",
    "LiabilityEntry",
    "BalanceSheetEntry",
    "BalanceSheetSection",
    "BalanceSheetReport",
    "ProfitAndLossReport",
    "CashFlowReport",
    "LiquidityState",
    "DayBookReport",
    "BankReconciliationLine",
    "BankReconciliationReport",
    "IntegrityReport",
    "build_trial_balance",
    "build_balance_sheet",
    "build_profit_and_loss",
    "build_cash_flow",
    "build_day_book",
    "build_bank_reconciliation",
    "scan_integrity",
    "render_to_dict",
    "ExportFormat",
    "export_report",
    "to_table",
    "to_csv",
    "to_document",
    "to_json",
]
