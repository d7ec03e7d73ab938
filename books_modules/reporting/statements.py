"""
Pure report transformation functions.

These functions transform ledgers and vouchers into structured reports.
ZERO I/O. ZERO side effects.

All monetary values are Decimal. All inputs/outputs are frozen dataclasses.

Functions in this module follow the books_kernel/domain/ purity convention:
- No database access
- No clock access (the caller supplies ``ReportMetadata``)
- No file I/O
- Deterministic: same inputs always produce same outputs

Every generator is independent.  They share the balance engine
(``compute_balance``) but never call each other, except that the
integrity scan reuses the trial balance equilibrium flag.
"""

from __future__ import annotations

import dataclasses
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Sequence
from uuid import UUID

from books_kernel.domain.balance import compute_balance
from books_kernel.models.ledger import Ledger
from books_kernel.models.voucher import Voucher, VoucherType
from books_modules.reporting.config import ReportingConfig
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
    ReportMetadata,
    TrialBalanceLine,
    TrialBalanceReport,
    TrialBalanceStatus,
)

ZERO = Decimal("0")

FIXED_ASSETS = "Fixed Assets"
CURRENT_ASSETS = "Current Assets"
CAPITAL_AND_RESERVES = "Capital & Reserves"
LONG_TERM_LIABILITIES = "Long-term Liabilities"
CURRENT_LIABILITIES = "Current Liabilities"

ALL_TYPES = "All"

BANKING_TYPES = (
    VoucherType.PAYMENT.value,
    VoucherType.RECEIPT.value,
    VoucherType.CONTRA.value,
)


# =========================================================================
# Helpers
# =========================================================================


def _sum_amounts(vouchers: Iterable[Voucher], *types: str) -> Decimal:
    """Sum ``amount`` over vouchers whose type equals one of ``types``."""
    return sum(
        (v.amount for v in vouchers if v.voucher_type in types),
        ZERO,
    )


def _count(vouchers: Iterable[Voucher], voucher_type: str) -> int:
    return sum(1 for v in vouchers if v.voucher_type == voucher_type)


def _make_section(
    label: str,
    entries: list[BalanceSheetEntry],
) -> BalanceSheetSection:
    """Create a balance sheet section from entries, keeping input order."""
    t = tuple(entries)
    return BalanceSheetSection(
        label=label,
        entries=t,
        total=sum((e.balance for e in t), ZERO),
    )


# =========================================================================
# 1. TRIAL BALANCE
# =========================================================================


def build_trial_balance_lines(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    config: ReportingConfig | None = None,
) -> tuple[TrialBalanceLine, ...]:
    """One line per ledger; the balance lands in the column of its side."""
    include_zero = config.include_zero_balances if config else True
    lines = []
    for ledger in ledgers:
        balance = compute_balance(ledger, vouchers)
        if not include_zero and balance == 0:
            continue
        lines.append(
            TrialBalanceLine(
                ledger_id=ledger.ledger_id,
                name=ledger.name,
                group=ledger.group,
                side=ledger.side,
                balance=balance,
                dr=balance if ledger.is_debit else ZERO,
                cr=ZERO if ledger.is_debit else balance,
            )
        )
    return tuple(lines)


def build_trial_balance(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    metadata: ReportMetadata,
    config: ReportingConfig | None = None,
) -> TrialBalanceReport:
    """Build a trial balance.  Imbalance is flagged in ``status``, never raised."""
    lines = build_trial_balance_lines(ledgers, vouchers, config)

    total_debit = sum((line.dr for line in lines), ZERO)
    total_credit = sum((line.cr for line in lines), ZERO)
    is_balanced = total_debit == total_credit

    return TrialBalanceReport(
        metadata=metadata,
        lines=lines,
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=is_balanced,
        variance=total_debit - total_credit,
        status=(
            TrialBalanceStatus.BALANCED if is_balanced
            else TrialBalanceStatus.VARIANCE
        ),
    )


# =========================================================================
# 2. BALANCE SHEET
# =========================================================================


def classify_for_balance_sheet(
    ledger: Ledger,
    balance: Decimal,
    config: ReportingConfig,
) -> BalanceSheetEntry:
    """
    Tag a ledger as an asset or liability entry.

    The asset test is a case-sensitive substring match of the configured
    asset keywords against ``group``; everything else is a liability or
    capital entry.  The section only affects presentation.
    """
    if config.is_asset_group(ledger.group):
        section = (
            FIXED_ASSETS
            if config.mentions(ledger.group, config.fixed_asset_keywords)
            else CURRENT_ASSETS
        )
        return AssetEntry(
            ledger_id=ledger.ledger_id,
            name=ledger.name,
            group=ledger.group,
            balance=balance,
            section=section,
        )

    if config.mentions(ledger.group, config.equity_keywords):
        section = CAPITAL_AND_RESERVES
    elif config.mentions(ledger.group, config.long_term_liability_keywords):
        section = LONG_TERM_LIABILITIES
    else:
        section = CURRENT_LIABILITIES
    return LiabilityEntry(
        ledger_id=ledger.ledger_id,
        name=ledger.name,
        group=ledger.group,
        balance=balance,
        section=section,
    )


def build_balance_sheet(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    metadata: ReportMetadata,
    config: ReportingConfig | None = None,
) -> BalanceSheetReport:
    """
    Build the balance sheet.

    Totals sum every classified entry.  Equilibrium is reported through
    ``differential`` and the advisory ``is_balanced`` only.
    """
    config = config or ReportingConfig()

    assets: list[AssetEntry] = []
    liabilities: list[LiabilityEntry] = []
    for ledger in ledgers:
        balance = compute_balance(ledger, vouchers)
        if not config.include_zero_balances and balance == 0:
            continue
        entry = classify_for_balance_sheet(ledger, balance, config)
        if isinstance(entry, AssetEntry):
            assets.append(entry)
        else:
            liabilities.append(entry)

    asset_sections = tuple(
        _make_section(label, [e for e in assets if e.section == label])
        for label in (FIXED_ASSETS, CURRENT_ASSETS)
    )
    liability_sections = tuple(
        _make_section(label, [e for e in liabilities if e.section == label])
        for label in (CAPITAL_AND_RESERVES, LONG_TERM_LIABILITIES, CURRENT_LIABILITIES)
    )

    total_assets = sum((e.balance for e in assets), ZERO)
    total_liab = sum((e.balance for e in liabilities), ZERO)

    return BalanceSheetReport(
        metadata=metadata,
        assets=tuple(assets),
        liabilities=tuple(liabilities),
        asset_sections=asset_sections,
        liability_sections=liability_sections,
        total_assets=total_assets,
        total_liab=total_liab,
        differential=abs(total_assets - total_liab),
        is_balanced=(total_assets == total_liab),
    )


# =========================================================================
# 3. PROFIT & LOSS
# =========================================================================


def build_profit_and_loss(
    vouchers: Sequence[Voucher],
    metadata: ReportMetadata,
) -> ProfitAndLossReport:
    """
    Voucher-type aggregate: income is Sales + Receipt, expenses are
    Purchase + Payment.  Ledger groups play no part.
    """
    sales = _sum_amounts(vouchers, VoucherType.SALES.value)
    receipts = _sum_amounts(vouchers, VoucherType.RECEIPT.value)
    purchases = _sum_amounts(vouchers, VoucherType.PURCHASE.value)
    payments = _sum_amounts(vouchers, VoucherType.PAYMENT.value)

    income = sales + receipts
    expenses = purchases + payments

    return ProfitAndLossReport(
        metadata=metadata,
        sales=sales,
        receipts=receipts,
        purchases=purchases,
        payments=payments,
        income=income,
        expenses=expenses,
        gross_profit=sales - purchases,
        net_profit=income - expenses,
    )


# =========================================================================
# 4. CASH FLOW
# =========================================================================


def build_cash_flow(
    vouchers: Sequence[Voucher],
    metadata: ReportMetadata,
) -> CashFlowReport:
    """Receipts in, payments out."""
    inflows = _sum_amounts(vouchers, VoucherType.RECEIPT.value)
    outflows = _sum_amounts(vouchers, VoucherType.PAYMENT.value)
    net = inflows - outflows

    return CashFlowReport(
        metadata=metadata,
        inflows=inflows,
        outflows=outflows,
        net=net,
        liquidity=LiquidityState.SURPLUS if net >= 0 else LiquidityState.DEFICIT,
        receipt_count=_count(vouchers, VoucherType.RECEIPT.value),
        payment_count=_count(vouchers, VoucherType.PAYMENT.value),
    )


# =========================================================================
# 5. DAY BOOK
# =========================================================================


def build_day_book(
    vouchers: Sequence[Voucher],
    metadata: ReportMetadata,
    search: str = "",
    voucher_type: str | None = None,
) -> DayBookReport:
    """
    Vouchers matching ``search`` (case-insensitive, over party and voucher
    id) and ``voucher_type`` (exact; None or "All" keeps every type).
    """
    needle = search.lower()
    type_filter = None if voucher_type in (None, ALL_TYPES) else voucher_type

    entries = tuple(
        v for v in vouchers
        if (needle in v.party.lower() or needle in v.voucher_id.lower())
        and (type_filter is None or v.voucher_type == type_filter)
    )

    return DayBookReport(
        metadata=metadata,
        entries=entries,
        count=len(entries),
        gross=sum((v.amount for v in entries), ZERO),
        search=search,
        voucher_type=type_filter,
    )


# =========================================================================
# 6. BANK RECONCILIATION
# =========================================================================


def _signed_bank_amount(voucher: Voucher) -> Decimal:
    """Payments leave the bank; everything else lands in it."""
    if voucher.voucher_type == VoucherType.PAYMENT:
        return -voucher.amount
    return voucher.amount


def build_bank_reconciliation(
    bank_ledger: Ledger,
    vouchers: Sequence[Voucher],
    metadata: ReportMetadata,
    include_reconciled: bool = False,
) -> BankReconciliationReport:
    """
    Balance as per books against balance as per bank.

    The book balance moves with every voucher touching the bank ledger;
    the bank balance moves only with those already reconciled.
    """
    touching = [v for v in vouchers if v.touches_ledger(bank_ledger.ledger_id)]

    book_balance = bank_ledger.opening_balance + sum(
        (_signed_bank_amount(v) for v in touching), ZERO,
    )
    bank_balance = bank_ledger.opening_balance + sum(
        (_signed_bank_amount(v) for v in touching if v.is_reconciled), ZERO,
    )

    lines = tuple(
        BankReconciliationLine(
            voucher_id=v.voucher_id,
            voucher_date=v.voucher_date,
            voucher_type=v.voucher_type,
            party=v.party,
            reference=v.reference,
            withdrawal=v.amount if v.voucher_type == VoucherType.PAYMENT else ZERO,
            deposit=ZERO if v.voucher_type == VoucherType.PAYMENT else v.amount,
            is_reconciled=v.is_reconciled,
            bank_date=v.bank_date,
        )
        for v in touching
        if v.voucher_type in BANKING_TYPES
        and (include_reconciled or not v.is_reconciled)
    )

    return BankReconciliationReport(
        metadata=metadata,
        bank_ledger_id=bank_ledger.ledger_id,
        bank_ledger_name=bank_ledger.name,
        book_balance=book_balance,
        bank_balance=bank_balance,
        difference=book_balance - bank_balance,
        lines=lines,
    )


# =========================================================================
# 7. INTEGRITY SCAN
# =========================================================================


def scan_integrity(
    ledgers: Sequence[Ledger],
    vouchers: Sequence[Voucher],
    metadata: ReportMetadata,
) -> IntegrityReport:
    """
    Report permissive-input findings without rejecting anything.

    - orphan references: ``ledger_id`` set but matching no ledger
    - negative ``amount`` values
    - ``amount != sub_total + tax_total`` where both parts are present
    """
    known = {ledger.ledger_id for ledger in ledgers}

    orphans = tuple(
        v.voucher_id for v in vouchers
        if v.ledger_id is not None and v.ledger_id not in known
    )
    negatives = tuple(v.voucher_id for v in vouchers if v.amount < 0)
    mismatches = tuple(
        v.voucher_id for v in vouchers
        if v.sub_total is not None
        and v.tax_total is not None
        and v.amount != v.sub_total + v.tax_total
    )

    lines = build_trial_balance_lines(ledgers, vouchers)
    tb_balanced = (
        sum((line.dr for line in lines), ZERO)
        == sum((line.cr for line in lines), ZERO)
    )

    return IntegrityReport(
        metadata=metadata,
        ledger_count=len(ledgers),
        voucher_count=len(vouchers),
        orphan_ledger_refs=orphans,
        negative_amounts=negatives,
        amount_mismatches=mismatches,
        trial_balance_balanced=tb_balanced,
        is_clean=(
            not orphans and not negatives and not mismatches and tb_balanced
        ),
    )


# =========================================================================
# 8. RENDERER (dict/JSON output)
# =========================================================================


def render_to_dict(obj: object) -> dict | list | str | int | float | bool | None:
    """
    Convert any report dataclass to a plain dict for JSON serialization.

    Handles:
    - Decimal -> str (preserving precision)
    - UUID -> str
    - date -> ISO format string
    - Enum -> .value
    - Nested frozen dataclasses -> nested dicts
    - Tuples -> lists
    - None preserved
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)
