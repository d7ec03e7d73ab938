"""
Report export -- flat delimited tables and structured documents.

Export is a pure serialization of an already computed report.  It never
recomputes anything: every value written comes from the report object.

Tables are written with the stdlib ``csv`` writer (minimal quoting), so
party names or narrations containing the delimiter, quotes or newlines
survive a round trip.  Documents are plain dicts built with
``render_to_dict`` (Decimal as string, dates ISO-8601, enums by value).
"""

from __future__ import annotations

import csv
import io
import json
from enum import Enum
from typing import Any

from books_kernel.exceptions import UnsupportedExportFormatError
from books_kernel.logging_config import get_logger
from books_modules.inventory.models import InventoryValuationReport
from books_modules.reporting.models import (
    AssetEntry,
    BalanceSheetReport,
    BankReconciliationReport,
    CashFlowReport,
    DayBookReport,
    IntegrityReport,
    ProfitAndLossReport,
    TrialBalanceReport,
)
from books_modules.reporting.statements import render_to_dict
from books_modules.tax.models import GstReport, GstReportType, TaxLiabilitySummary

logger = get_logger("modules.reporting.export")

Table = tuple[tuple[str, ...], list[tuple[str, ...]]]


class ExportFormat(str, Enum):
    """Supported export targets."""

    CSV = "CSV"
    JSON = "JSON"

    @classmethod
    def parse(cls, value: "ExportFormat | str") -> "ExportFormat":
        """
        Resolve a format name, case-insensitively.

        Raises:
            UnsupportedExportFormatError: ``value`` is not CSV or JSON.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise UnsupportedExportFormatError(str(value)) from None


def _cell(value: Any) -> str:
    """Render one table cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    rendered = render_to_dict(value)
    return str(rendered)


def _row(*values: Any) -> tuple[str, ...]:
    return tuple(_cell(v) for v in values)


# =========================================================================
# Tables
# =========================================================================


def _trial_balance_table(report: TrialBalanceReport) -> Table:
    headers = ("Ledger ID", "Ledger", "Group", "Side", "Debit", "Credit")
    rows = [
        _row(line.ledger_id, line.name, line.group, line.side, line.dr, line.cr)
        for line in report.lines
    ]
    return headers, rows


def _balance_sheet_table(report: BalanceSheetReport) -> Table:
    headers = ("Side", "Section", "Ledger ID", "Ledger", "Group", "Balance")
    rows = []
    for entry in (*report.assets, *report.liabilities):
        side = "Asset" if isinstance(entry, AssetEntry) else "Liability"
        rows.append(
            _row(side, entry.section, entry.ledger_id, entry.name, entry.group, entry.balance)
        )
    return headers, rows


def _profit_and_loss_table(report: ProfitAndLossReport) -> Table:
    headers = ("Metric", "Amount")
    rows = [
        _row("Sales", report.sales),
        _row("Other Income", report.receipts),
        _row("Purchases", report.purchases),
        _row("Indirect Expenses", report.payments),
        _row("Gross Profit", report.gross_profit),
        _row("Total Income", report.income),
        _row("Total Expenses", report.expenses),
        _row("Net Profit", report.net_profit),
    ]
    return headers, rows


def _cash_flow_table(report: CashFlowReport) -> Table:
    headers = ("Metric", "Value")
    rows = [
        _row("Inflows", report.inflows),
        _row("Outflows", report.outflows),
        _row("Net", report.net),
        _row("Liquidity", report.liquidity),
        _row("Receipts", report.receipt_count),
        _row("Payments", report.payment_count),
    ]
    return headers, rows


def _inventory_table(report: InventoryValuationReport) -> Table:
    headers = (
        "Item ID", "Item", "Category", "Unit",
        "Qty In", "Qty Out", "Closing Qty", "Sale Price", "Valuation",
    )
    rows = [
        _row(
            r.item_id, r.name, r.category, r.unit,
            r.qty_in, r.qty_out, r.current_qty, r.sale_price, r.valuation,
        )
        for r in report.rows
    ]
    return headers, rows


def _gst_table(report: GstReport) -> Table:
    if report.report_type is GstReportType.HSN_SUMMARY:
        headers = ("HSN/SAC", "Description", "UOM", "Qty", "Taxable Value", "Tax Amount")
        rows = [
            _row(r.hsn, r.description, r.uom, r.qty, r.taxable, r.tax_amount)
            for r in report.hsn_summary
        ]
        return headers, rows

    headers = (
        "Vch ID", "Date", "Party", "Supply Type", "Class",
        "Taxable Value", "Tax Total", "Grand Total",
    )
    rows = [
        _row(
            v.voucher_id, v.voucher_date, v.party, v.supply_type,
            v.gst_classification, v.taxable_value, v.tax_amount, v.amount,
        )
        for v in report.vouchers
    ]
    return headers, rows


def _tax_liability_table(report: TaxLiabilitySummary) -> Table:
    headers = ("Metric", "Amount")
    rows = [
        _row("Output Local (CGST+SGST)", report.output_local),
        _row("Output Interstate (IGST)", report.output_interstate),
        _row("Input Local (CGST+SGST)", report.input_local),
        _row("Input Interstate (IGST)", report.input_interstate),
        _row("Total Output", report.total_output),
        _row("Total Input", report.total_input),
        _row("Net Payable", report.net_payable),
        _row("Position", report.position),
    ]
    return headers, rows


def _day_book_table(report: DayBookReport) -> Table:
    headers = ("Date", "Voucher ID", "Type", "Party", "Narration", "Amount")
    rows = [
        _row(v.voucher_date, v.voucher_id, v.voucher_type, v.party, v.narration, v.amount)
        for v in report.entries
    ]
    return headers, rows


def _bank_reconciliation_table(report: BankReconciliationReport) -> Table:
    headers = (
        "Date", "Voucher ID", "Type", "Party", "Reference",
        "Withdrawal", "Deposit", "Reconciled", "Bank Date",
    )
    rows = [
        _row(
            line.voucher_date, line.voucher_id, line.voucher_type, line.party,
            line.reference, line.withdrawal, line.deposit, line.is_reconciled,
            line.bank_date,
        )
        for line in report.lines
    ]
    return headers, rows


def _integrity_table(report: IntegrityReport) -> Table:
    headers = ("Check", "Voucher ID")
    rows = [_row("orphan_ledger_ref", vid) for vid in report.orphan_ledger_refs]
    rows += [_row("negative_amount", vid) for vid in report.negative_amounts]
    rows += [_row("amount_mismatch", vid) for vid in report.amount_mismatches]
    if not report.trial_balance_balanced:
        rows.append(_row("trial_balance_variance", ""))
    return headers, rows


_TABLE_BUILDERS = {
    TrialBalanceReport: _trial_balance_table,
    BalanceSheetReport: _balance_sheet_table,
    ProfitAndLossReport: _profit_and_loss_table,
    CashFlowReport: _cash_flow_table,
    InventoryValuationReport: _inventory_table,
    GstReport: _gst_table,
    TaxLiabilitySummary: _tax_liability_table,
    DayBookReport: _day_book_table,
    BankReconciliationReport: _bank_reconciliation_table,
    IntegrityReport: _integrity_table,
}


def to_table(report: object) -> Table:
    """
    Flatten a report into ``(headers, rows)``; every cell is a string.

    Raises:
        TypeError: ``report`` is not a report object.
    """
    builder = _TABLE_BUILDERS.get(type(report))
    if builder is None:
        raise TypeError(f"Cannot tabulate {type(report).__name__}")
    return builder(report)


def to_csv(report: object, delimiter: str = ",") -> str:
    """One header row plus one row per entry, escaped by the csv writer."""
    headers, rows = to_table(report)
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=delimiter,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\n",
    )
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


# =========================================================================
# Documents
# =========================================================================


def report_tag(report: object) -> str:
    """The report type tag written into exported documents."""
    if isinstance(report, GstReport):
        return report.report_type.value
    metadata = getattr(report, "metadata", None)
    if metadata is not None:
        return metadata.kind.value
    return type(report).__name__


def period_label(report: object) -> str:
    """The period string written into exported documents."""
    period = getattr(report, "period", None)
    if period is not None:
        return period.label
    metadata = getattr(report, "metadata", None)
    if metadata is not None:
        return metadata.period_label
    return "All periods"


def to_document(report: object, company_name: str) -> dict:
    """
    Structured document: company, period, report tag and summary.

    GST reports also carry the HSN summary and the period-filtered
    voucher list.
    """
    if isinstance(report, GstReport):
        return {
            "company": company_name,
            "period": period_label(report),
            "report": report_tag(report),
            "summary": render_to_dict(report.summary),
            "hsn_summary": render_to_dict(report.hsn_summary),
            "vouchers": render_to_dict(report.vouchers),
        }

    summary = render_to_dict(report)
    if isinstance(summary, dict):
        summary.pop("metadata", None)
    return {
        "company": company_name,
        "period": period_label(report),
        "report": report_tag(report),
        "summary": summary,
    }


def to_json(report: object, company_name: str, indent: int | None = 2) -> str:
    return json.dumps(to_document(report, company_name), indent=indent)


def export_report(
    report: object,
    fmt: ExportFormat | str,
    company_name: str,
    delimiter: str = ",",
) -> str:
    """
    Serialize ``report`` to the requested format.

    Raises:
        UnsupportedExportFormatError: ``fmt`` is not CSV or JSON.
    """
    export_format = ExportFormat.parse(fmt)
    if export_format is ExportFormat.CSV:
        content = to_csv(report, delimiter=delimiter)
    else:
        content = to_json(report, company_name)

    logger.info(
        "report_exported",
        extra={
            "report": report_tag(report),
            "format": export_format.value,
            "bytes": len(content),
        },
    )
    return content
