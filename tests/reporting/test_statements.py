"""
Unit tests for the pure statement builders.

Every builder takes ledgers/vouchers plus a ReportMetadata and returns a
frozen report; no clock, no session.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from books_kernel.models.ledger import BalanceSide
from books_kernel.models.voucher import LedgerEntry
from books_modules.reporting.config import ReportingConfig
from books_modules.reporting.models import (
    AssetEntry,
    LiabilityEntry,
    LiquidityState,
    ReportKind,
    ReportMetadata,
    TrialBalanceStatus,
)
from books_modules.reporting.statements import (
    CAPITAL_AND_RESERVES,
    CURRENT_ASSETS,
    CURRENT_LIABILITIES,
    FIXED_ASSETS,
    LONG_TERM_LIABILITIES,
    build_balance_sheet,
    build_bank_reconciliation,
    build_cash_flow,
    build_day_book,
    build_profit_and_loss,
    build_trial_balance,
    classify_for_balance_sheet,
    render_to_dict,
    scan_integrity,
)
from tests.factories import make_ledger, make_voucher


def _metadata(kind: ReportKind = ReportKind.TRIAL_BALANCE) -> ReportMetadata:
    return ReportMetadata(
        kind=kind,
        entity_name="Acme Traders",
        currency="INR",
        generated_at="2024-01-01T12:00:00+00:00",
    )


# =========================================================================
# Trial balance
# =========================================================================


class TestTrialBalance:

    def test_balanced_books(self):
        ledgers = [
            make_ledger("L1", side=BalanceSide.DEBIT, opening=500),
            make_ledger("L2", side=BalanceSide.CREDIT, opening=500),
        ]
        report = build_trial_balance(ledgers, [], _metadata())
        assert report.total_debit == Decimal("500")
        assert report.total_credit == Decimal("500")
        assert report.is_balanced is True
        assert report.status is TrialBalanceStatus.BALANCED
        assert report.variance == Decimal("0")

    def test_variance_is_flagged_not_raised(self):
        ledgers = [
            make_ledger("L1", side=BalanceSide.DEBIT, opening=700),
            make_ledger("L2", side=BalanceSide.CREDIT, opening=500),
        ]
        report = build_trial_balance(ledgers, [], _metadata())
        assert report.is_balanced is False
        assert report.status is TrialBalanceStatus.VARIANCE
        assert report.variance == Decimal("200")

    def test_balance_lands_in_side_column(self):
        ledgers = [
            make_ledger("L1", side=BalanceSide.DEBIT, opening=100),
            make_ledger("L2", side=BalanceSide.CREDIT, opening=40),
        ]
        lines = build_trial_balance(ledgers, [], _metadata()).lines
        assert (lines[0].dr, lines[0].cr) == (Decimal("100"), Decimal("0"))
        assert (lines[1].dr, lines[1].cr) == (Decimal("0"), Decimal("40"))

    def test_negative_balance_stays_in_its_column(self):
        ledgers = [make_ledger("L1", side=BalanceSide.CREDIT, opening=10)]
        vouchers = [make_voucher("V1", amount=30, ledger_id="L1")]
        line = build_trial_balance(ledgers, vouchers, _metadata()).lines[0]
        assert line.cr == Decimal("-20")
        assert line.dr == Decimal("0")

    def test_zero_balances_can_be_hidden(self):
        ledgers = [make_ledger("L1"), make_ledger("L2", opening=5)]
        config = ReportingConfig(include_zero_balances=False)
        report = build_trial_balance(ledgers, [], _metadata(), config)
        assert [line.ledger_id for line in report.lines] == ["L2"]

    def test_empty_books_are_balanced(self):
        report = build_trial_balance([], [], _metadata())
        assert report.lines == ()
        assert report.is_balanced is True


# =========================================================================
# Balance sheet
# =========================================================================


class TestBalanceSheet:

    def test_cash_against_capital(self):
        ledgers = [
            make_ledger("CASH", "Cash", BalanceSide.DEBIT, 1000, "Cash-in-hand"),
            make_ledger("CAP", "Capital", BalanceSide.CREDIT, 1000, "Equity"),
        ]
        report = build_balance_sheet(ledgers, [], _metadata(ReportKind.BALANCE_SHEET))
        assert report.total_assets == Decimal("1000")
        assert report.total_liab == Decimal("1000")
        assert report.differential == Decimal("0")
        assert report.is_balanced is True
        assert [e.ledger_id for e in report.assets] == ["CASH"]
        assert [e.ledger_id for e in report.liabilities] == ["CAP"]

    def test_differential_is_absolute(self):
        ledgers = [
            make_ledger("CASH", group="Cash-in-hand", opening=100),
            make_ledger("LOAN", side=BalanceSide.CREDIT, group="Secured Loans", opening=300),
        ]
        report = build_balance_sheet(ledgers, [], _metadata(ReportKind.BALANCE_SHEET))
        assert report.differential == Decimal("200")
        assert report.is_balanced is False

    def test_asset_match_is_case_sensitive(self):
        entry = classify_for_balance_sheet(
            make_ledger("L1", group="cash-in-hand"), Decimal("1"), ReportingConfig(),
        )
        assert isinstance(entry, LiabilityEntry)

    @pytest.mark.parametrize(
        "group, entry_type, section",
        [
            ("Fixed Assets", AssetEntry, FIXED_ASSETS),
            ("Bank Accounts", AssetEntry, CURRENT_ASSETS),
            ("Sundry Debtors", AssetEntry, CURRENT_ASSETS),
            ("Capital Account", LiabilityEntry, CAPITAL_AND_RESERVES),
            ("Reserves & Surplus", LiabilityEntry, CAPITAL_AND_RESERVES),
            ("Secured Loans", LiabilityEntry, LONG_TERM_LIABILITIES),
            ("Sundry Creditors", LiabilityEntry, CURRENT_LIABILITIES),
            ("", LiabilityEntry, CURRENT_LIABILITIES),
        ],
    )
    def test_classification(self, group, entry_type, section):
        entry = classify_for_balance_sheet(
            make_ledger("L1", group=group), Decimal("1"), ReportingConfig(),
        )
        assert isinstance(entry, entry_type)
        assert entry.section == section

    def test_sections_in_fixed_order_with_totals(self):
        ledgers = [
            make_ledger("BANK", group="Bank Accounts", opening=70),
            make_ledger("FA", group="Fixed Assets", opening=30),
            make_ledger("CR", side=BalanceSide.CREDIT, group="Sundry Creditors", opening=60),
            make_ledger("CAP", side=BalanceSide.CREDIT, group="Capital Account", opening=40),
        ]
        report = build_balance_sheet(ledgers, [], _metadata(ReportKind.BALANCE_SHEET))
        assert [s.label for s in report.asset_sections] == [FIXED_ASSETS, CURRENT_ASSETS]
        assert [s.total for s in report.asset_sections] == [Decimal("30"), Decimal("70")]
        assert [s.label for s in report.liability_sections] == [
            CAPITAL_AND_RESERVES, LONG_TERM_LIABILITIES, CURRENT_LIABILITIES,
        ]
        assert report.liability_sections[1].entries == ()
        assert report.liability_sections[1].total == Decimal("0")

    def test_custom_asset_keywords(self):
        config = ReportingConfig(asset_group_keywords=("Stock",))
        entry = classify_for_balance_sheet(
            make_ledger("L1", group="Stock-in-hand"), Decimal("5"), config,
        )
        assert isinstance(entry, AssetEntry)


# =========================================================================
# Profit & loss, cash flow
# =========================================================================


class TestProfitAndLoss:

    def test_sales_against_purchases(self):
        vouchers = [
            make_voucher("V1", "Sales", 5000),
            make_voucher("V2", "Purchase", 3000),
        ]
        report = build_profit_and_loss(vouchers, _metadata(ReportKind.PROFIT_AND_LOSS))
        assert report.income == Decimal("5000")
        assert report.expenses == Decimal("3000")
        assert report.net_profit == Decimal("2000")
        assert report.gross_profit == Decimal("2000")
        assert report.is_profit

    def test_receipts_and_payments_count(self):
        vouchers = [
            make_voucher("V1", "Receipt", 100),
            make_voucher("V2", "Payment", 400),
        ]
        report = build_profit_and_loss(vouchers, _metadata(ReportKind.PROFIT_AND_LOSS))
        assert report.net_profit == Decimal("-300")
        assert not report.is_profit

    def test_other_types_are_ignored(self):
        vouchers = [
            make_voucher("V1", "Journal", 999),
            make_voucher("V2", "Sales Return", 50),
            make_voucher("V3", "Credit Note", 10),
        ]
        report = build_profit_and_loss(vouchers, _metadata(ReportKind.PROFIT_AND_LOSS))
        assert report.income == Decimal("0")
        assert report.expenses == Decimal("0")


class TestCashFlow:

    def test_surplus(self):
        vouchers = [
            make_voucher("V1", "Receipt", 800),
            make_voucher("V2", "Receipt", 200),
            make_voucher("V3", "Payment", 600),
            make_voucher("V4", "Sales", 10_000),
        ]
        report = build_cash_flow(vouchers, _metadata(ReportKind.CASH_FLOW))
        assert report.inflows == Decimal("1000")
        assert report.outflows == Decimal("600")
        assert report.net == Decimal("400")
        assert report.liquidity is LiquidityState.SURPLUS
        assert (report.receipt_count, report.payment_count) == (2, 1)

    def test_deficit(self):
        vouchers = [make_voucher("V1", "Payment", 1)]
        report = build_cash_flow(vouchers, _metadata(ReportKind.CASH_FLOW))
        assert report.liquidity is LiquidityState.DEFICIT

    def test_zero_net_is_surplus(self):
        report = build_cash_flow([], _metadata(ReportKind.CASH_FLOW))
        assert report.net == Decimal("0")
        assert report.liquidity is LiquidityState.SURPLUS


# =========================================================================
# Day book
# =========================================================================


class TestDayBook:

    VOUCHERS = [
        make_voucher("SAL-001", "Sales", 100, party="Globex Corp"),
        make_voucher("PUR-001", "Purchase", 40, party="Initech"),
        make_voucher("SAL-002", "Sales", 60, party="Initech"),
    ]

    def test_no_filter_keeps_everything(self):
        report = build_day_book(self.VOUCHERS, _metadata(ReportKind.DAY_BOOK))
        assert report.count == 3
        assert report.gross == Decimal("200")

    def test_search_matches_party_case_insensitively(self):
        report = build_day_book(
            self.VOUCHERS, _metadata(ReportKind.DAY_BOOK), search="initech",
        )
        assert [v.voucher_id for v in report.entries] == ["PUR-001", "SAL-002"]

    def test_search_matches_voucher_id(self):
        report = build_day_book(
            self.VOUCHERS, _metadata(ReportKind.DAY_BOOK), search="sal-00",
        )
        assert report.count == 2

    def test_type_filter(self):
        report = build_day_book(
            self.VOUCHERS, _metadata(ReportKind.DAY_BOOK),
            search="Initech", voucher_type="Sales",
        )
        assert [v.voucher_id for v in report.entries] == ["SAL-002"]

    def test_all_means_no_type_filter(self):
        report = build_day_book(
            self.VOUCHERS, _metadata(ReportKind.DAY_BOOK), voucher_type="All",
        )
        assert report.count == 3
        assert report.voucher_type is None


# =========================================================================
# Bank reconciliation
# =========================================================================


class TestBankReconciliation:

    def _bank(self):
        return make_ledger("BANK", "HDFC", BalanceSide.DEBIT, 1000, "Bank Accounts")

    def test_unreconciled_items_make_the_difference(self):
        vouchers = [
            make_voucher("R1", "Receipt", 500, ledger_id="BANK", is_reconciled=True,
                         bank_date=date(2024, 1, 16)),
            make_voucher("P1", "Payment", 200, ledger_id="BANK"),
            make_voucher("R2", "Receipt", 50, ledger_id="CASH"),
        ]
        report = build_bank_reconciliation(
            self._bank(), vouchers, _metadata(ReportKind.BANK_RECONCILIATION),
        )
        assert report.book_balance == Decimal("1300")
        assert report.bank_balance == Decimal("1500")
        assert report.difference == Decimal("-200")
        assert not report.is_reconciled
        assert [line.voucher_id for line in report.lines] == ["P1"]
        assert report.lines[0].withdrawal == Decimal("200")
        assert report.lines[0].deposit == Decimal("0")

    def test_include_reconciled_lists_everything(self):
        vouchers = [
            make_voucher("R1", "Receipt", 500, ledger_id="BANK", is_reconciled=True),
        ]
        report = build_bank_reconciliation(
            self._bank(), vouchers, _metadata(ReportKind.BANK_RECONCILIATION),
            include_reconciled=True,
        )
        assert report.is_reconciled
        assert report.lines[0].deposit == Decimal("500")
        assert report.lines[0].is_reconciled

    def test_contra_leg_touches_bank(self):
        contra = make_voucher(
            "C1", "Contra", 300,
            entries=(
                LedgerEntry("BANK", "HDFC", "Dr", Decimal("300")),
                LedgerEntry("CASH", "Cash", "Cr", Decimal("300")),
            ),
        )
        report = build_bank_reconciliation(
            self._bank(), [contra], _metadata(ReportKind.BANK_RECONCILIATION),
        )
        assert report.book_balance == Decimal("1300")
        assert [line.voucher_id for line in report.lines] == ["C1"]


# =========================================================================
# Integrity scan
# =========================================================================


class TestIntegrityScan:

    def test_clean_books(self):
        ledgers = [
            make_ledger("L1", opening=10),
            make_ledger("L2", side=BalanceSide.CREDIT, opening=10),
        ]
        report = scan_integrity(ledgers, [], _metadata(ReportKind.INTEGRITY_CHECK))
        assert report.is_clean

    def test_findings_are_reported(self):
        ledgers = [make_ledger("L1")]
        vouchers = [
            make_voucher("V1", amount=10, ledger_id="GHOST"),
            make_voucher("V2", amount=-5),
            make_voucher("V3", amount=120, sub_total=Decimal("100"), tax_total=Decimal("18")),
            make_voucher("V4", amount=118, sub_total=Decimal("100"), tax_total=Decimal("18")),
        ]
        report = scan_integrity(ledgers, vouchers, _metadata(ReportKind.INTEGRITY_CHECK))
        assert report.orphan_ledger_refs == ("V1",)
        assert report.negative_amounts == ("V2",)
        assert report.amount_mismatches == ("V3",)
        assert report.voucher_count == 4
        assert not report.is_clean

    def test_unbalanced_trial_balance_is_a_finding(self):
        ledgers = [make_ledger("L1", opening=1)]
        report = scan_integrity(ledgers, [], _metadata(ReportKind.INTEGRITY_CHECK))
        assert report.trial_balance_balanced is False
        assert not report.is_clean


# =========================================================================
# Renderer
# =========================================================================


class TestRenderToDict:

    def test_decimal_date_and_enum_rendering(self):
        ledgers = [make_ledger("L1", side=BalanceSide.CREDIT, opening="12.50")]
        report = build_trial_balance(ledgers, [], _metadata())
        rendered = render_to_dict(report)
        assert rendered["total_credit"] == "12.50"
        assert rendered["status"] == "variance"
        assert rendered["lines"][0]["side"] == "Credit"
        assert rendered["metadata"]["kind"] == "trial_balance"

    def test_none_and_dates(self):
        assert render_to_dict(None) is None
        assert render_to_dict(date(2024, 1, 2)) == "2024-01-02"
