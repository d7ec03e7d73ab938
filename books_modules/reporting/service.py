"""
Reporting Module Service (``books_modules.reporting.service``).

Responsibility
--------------
Orchestrates report generation -- trial balance, balance sheet, profit &
loss, cash flow, inventory summary, GST reports, day book, bank
reconciliation and the integrity scan -- over one immutable
``BooksSnapshot``, delegating to the pure functions in ``statements.py``,
``books_modules.tax.helpers`` and ``books_modules.inventory.helpers``.
This is a **read-only** service: it never mutates ledgers or vouchers and
never writes audit entries.

Architecture position
---------------------
**Modules layer** -- thin glue.  Constructor: ``snapshot`` + ``clock`` +
``config``.  Report selection is an explicit ``ReportKind`` argument to
``generate()``; the service holds no "active report" state.

Invariants enforced
-------------------
* Read-only -- the snapshot is never modified.
* Every call recomputes from the full snapshot; nothing is cached.
* Same snapshot + same clock => equal reports.

Failure modes
-------------
* Unknown report selector  -> ``UnknownReportTypeError``.
* Bank reconciliation for an absent ledger  -> ``LedgerNotFoundError``.
* Report arithmetic never raises.
"""

from __future__ import annotations

import calendar
from datetime import date
from typing import Any

from books_kernel.domain.clock import Clock, SystemClock
from books_kernel.domain.period import DateRange
from books_kernel.exceptions import LedgerNotFoundError
from books_kernel.logging_config import LogContext, get_logger
from books_kernel.models.snapshot import BooksSnapshot

from books_modules.inventory.helpers import build_inventory_valuation
from books_modules.inventory.models import InventoryValuationReport
from books_modules.reporting.config import ReportingConfig
from books_modules.reporting.export import ExportFormat, export_report
from books_modules.reporting.models import (
    BalanceSheetReport,
    BankReconciliationReport,
    CashFlowReport,
    DayBookReport,
    IntegrityReport,
    ProfitAndLossReport,
    ReportKind,
    ReportMetadata,
    TrialBalanceReport,
)
from books_modules.reporting.statements import (
    build_balance_sheet,
    build_bank_reconciliation,
    build_cash_flow,
    build_day_book,
    build_profit_and_loss,
    build_trial_balance,
    scan_integrity,
)
from books_modules.tax.config import TaxConfig
from books_modules.tax.helpers import build_tax_liability_summary, select_gst_report
from books_modules.tax.models import GstReport, GstReportType, TaxLiabilitySummary

logger = get_logger("modules.reporting.service")


def month_of(day: date) -> DateRange:
    """The calendar month containing ``day``."""
    last = calendar.monthrange(day.year, day.month)[1]
    return DateRange(day.replace(day=1), day.replace(day=last))


class ReportingService:
    """
    Report generation service over one books snapshot.

    Contract
    --------
    * Every public method returns a typed report value object.
    * ``generate(kind, **params)`` dispatches on an explicit selector.

    Guarantees
    ----------
    * No report logic lives in this class; it builds metadata and
      delegates to pure functions.
    * Clock is injectable for deterministic testing.

    Non-goals
    ---------
    * Does NOT persist reports (they are recomputed on every call).
    * Does NOT record audit entries (company workflows do that through
      ``AuditorService``).
    """

    def __init__(
        self,
        snapshot: BooksSnapshot,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
        tax_config: TaxConfig | None = None,
    ):
        self._snapshot = snapshot
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._tax_config = tax_config or TaxConfig.with_defaults()

        logger.info(
            "reporting_service_initialized",
            extra={
                "company_id": snapshot.company.company_id,
                "ledger_count": len(snapshot.ledgers),
                "voucher_count": len(snapshot.vouchers),
            },
        )

    @property
    def snapshot(self) -> BooksSnapshot:
        return self._snapshot

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _build_metadata(
        self,
        kind: ReportKind,
        period: DateRange | None = None,
    ) -> ReportMetadata:
        """Build report metadata with injected clock timestamp."""
        company = self._snapshot.company
        return ReportMetadata(
            kind=kind,
            entity_name=company.name or self._config.entity_name,
            currency=company.currency or self._config.default_currency,
            generated_at=self._clock.now().isoformat(),
            period=period,
        )

    # =========================================================================
    # Public API
    # =========================================================================

    def trial_balance(self) -> TrialBalanceReport:
        """Generate a trial balance.  Variance is flagged, never raised."""
        s = self._snapshot
        report = build_trial_balance(
            s.ledgers, s.vouchers,
            self._build_metadata(ReportKind.TRIAL_BALANCE),
            self._config,
        )
        log = logger.info if report.is_balanced else logger.warning
        log(
            "trial_balance_generated",
            extra={
                "line_count": len(report.lines),
                "total_debit": str(report.total_debit),
                "total_credit": str(report.total_credit),
                "status": report.status.value,
            },
        )
        return report

    def balance_sheet(self) -> BalanceSheetReport:
        """Generate the balance sheet; equilibrium is advisory only."""
        s = self._snapshot
        report = build_balance_sheet(
            s.ledgers, s.vouchers,
            self._build_metadata(ReportKind.BALANCE_SHEET),
            self._config,
        )
        logger.info(
            "balance_sheet_generated",
            extra={
                "total_assets": str(report.total_assets),
                "total_liab": str(report.total_liab),
                "differential": str(report.differential),
            },
        )
        return report

    def profit_and_loss(self) -> ProfitAndLossReport:
        report = build_profit_and_loss(
            self._snapshot.vouchers,
            self._build_metadata(ReportKind.PROFIT_AND_LOSS),
        )
        logger.info(
            "profit_and_loss_generated",
            extra={
                "income": str(report.income),
                "expenses": str(report.expenses),
                "net_profit": str(report.net_profit),
            },
        )
        return report

    def cash_flow(self) -> CashFlowReport:
        report = build_cash_flow(
            self._snapshot.vouchers,
            self._build_metadata(ReportKind.CASH_FLOW),
        )
        logger.info(
            "cash_flow_generated",
            extra={"net": str(report.net), "liquidity": report.liquidity.value},
        )
        return report

    def inventory_summary(self) -> InventoryValuationReport:
        report = build_inventory_valuation(
            self._snapshot.items,
            self._snapshot.vouchers,
            self._build_metadata(ReportKind.INVENTORY_SUMMARY),
        )
        logger.info(
            "inventory_summary_generated",
            extra={
                "item_count": len(report.rows),
                "total_valuation": str(report.total_valuation),
                "negative_stock_items": len(report.negative_stock_items),
            },
        )
        return report

    def gst_report(
        self,
        report_type: GstReportType | str = GstReportType.GSTR_3B,
        period: DateRange | None = None,
    ) -> GstReport:
        """
        Generate a statutory tax report.

        Args:
            report_type: GSTR-1, GSTR-2, GSTR-3B or HSN-SUMMARY.
            period: Inclusive date range.  Defaults to the calendar month
                of the injected clock.
        """
        if period is None:
            period = month_of(self._clock.now().date())
        s = self._snapshot
        report = select_gst_report(
            report_type,
            s.vouchers,
            period,
            taxes=s.taxes,
            tax_groups=s.tax_groups,
            config=self._tax_config,
            metadata=self._build_metadata(ReportKind.GST_REPORTS, period),
        )
        logger.info(
            "gst_report_selected",
            extra={
                "gst_report_type": report.report_type.value,
                "period": period.label,
                "voucher_count": len(report.vouchers),
                "net_payable": str(report.summary.net_payable),
            },
        )
        return report

    def tax_liability(self, period: DateRange | None = None) -> TaxLiabilitySummary:
        """Consolidated liability registry, net of returns."""
        report = build_tax_liability_summary(
            self._snapshot.vouchers,
            period,
            metadata=self._build_metadata(ReportKind.TAX_LIABILITY, period),
        )
        logger.info(
            "tax_liability_generated",
            extra={
                "net_payable": str(report.net_payable),
                "position": report.position.value,
            },
        )
        return report

    def day_book(
        self,
        search: str = "",
        voucher_type: str | None = None,
    ) -> DayBookReport:
        report = build_day_book(
            self._snapshot.vouchers,
            self._build_metadata(ReportKind.DAY_BOOK),
            search=search,
            voucher_type=voucher_type,
        )
        logger.info(
            "day_book_generated",
            extra={"count": report.count, "gross": str(report.gross)},
        )
        return report

    def bank_reconciliation(
        self,
        bank_ledger_id: str,
        include_reconciled: bool = False,
    ) -> BankReconciliationReport:
        """
        Reconcile one bank ledger.

        Raises:
            LedgerNotFoundError: ``bank_ledger_id`` is not in the snapshot.
        """
        ledger = next(
            (lg for lg in self._snapshot.ledgers if lg.ledger_id == bank_ledger_id),
            None,
        )
        if ledger is None:
            logger.warning(
                "bank_ledger_not_found", extra={"ledger_id": bank_ledger_id},
            )
            raise LedgerNotFoundError(bank_ledger_id)

        report = build_bank_reconciliation(
            ledger,
            self._snapshot.vouchers,
            self._build_metadata(ReportKind.BANK_RECONCILIATION),
            include_reconciled=include_reconciled,
        )
        logger.info(
            "bank_reconciliation_generated",
            extra={
                "ledger_id": bank_ledger_id,
                "difference": str(report.difference),
                "pending": len(report.lines),
            },
        )
        return report

    def integrity_check(self) -> IntegrityReport:
        s = self._snapshot
        report = scan_integrity(
            s.ledgers, s.vouchers,
            self._build_metadata(ReportKind.INTEGRITY_CHECK),
        )
        log = logger.info if report.is_clean else logger.warning
        log(
            "integrity_check_completed",
            extra={
                "orphan_ledger_refs": len(report.orphan_ledger_refs),
                "negative_amounts": len(report.negative_amounts),
                "amount_mismatches": len(report.amount_mismatches),
                "trial_balance_balanced": report.trial_balance_balanced,
            },
        )
        return report

    # =========================================================================
    # Selector dispatch
    # =========================================================================

    def generate(self, kind: ReportKind | str, **params: Any) -> object:
        """
        Generate the report named by ``kind``.

        ``params`` are passed to the matching method (e.g. ``report_type``
        and ``period`` for GST reports, ``search`` for the day book).

        Raises:
            UnknownReportTypeError: ``kind`` names no known report.
        """
        selected = ReportKind.parse(kind)
        handlers = {
            ReportKind.TRIAL_BALANCE: self.trial_balance,
            ReportKind.BALANCE_SHEET: self.balance_sheet,
            ReportKind.PROFIT_AND_LOSS: self.profit_and_loss,
            ReportKind.CASH_FLOW: self.cash_flow,
            ReportKind.INVENTORY_SUMMARY: self.inventory_summary,
            ReportKind.GST_REPORTS: self.gst_report,
            ReportKind.DAY_BOOK: self.day_book,
            ReportKind.INTEGRITY_CHECK: self.integrity_check,
            ReportKind.BANK_RECONCILIATION: self.bank_reconciliation,
            ReportKind.TAX_LIABILITY: self.tax_liability,
        }
        with LogContext.bind(
            company_id=self._snapshot.company.company_id or None,
            report_type=selected.value,
        ):
            report = handlers[selected](**params)
            logger.info("report_generated", extra={"kind": selected.value})
        return report

    def export(self, report: object, fmt: ExportFormat | str) -> str:
        """Serialize an already generated report for this company."""
        return export_report(
            report,
            fmt,
            self._snapshot.company.name or self._config.entity_name,
            delimiter=self._config.csv_delimiter,
        )
