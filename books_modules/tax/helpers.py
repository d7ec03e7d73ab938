"""
Tax Helpers -- Pure aggregation functions for the GST-style reports.

Responsibility:
    Classifies vouchers by supply direction (Output/Input) and locality
    (Local/Interstate) into liability and input-tax-credit buckets,
    aggregates line items by HSN/SAC code and by tax rate, and selects the
    requested statutory report for a period.

Architecture:
    books_modules -- report layer.
    Every function is pure: no I/O, no side effects, no database.

Invariants:
    - All inputs and outputs are ``Decimal`` -- NEVER ``float``.
    - Classification is by equality.  A voucher with an unknown or missing
      ``gst_classification`` joins no tax bucket but stays in the raw
      voucher listing.
    - Local tax splits 50/50 into CGST/SGST; any other supply type puts
      the whole amount into IGST.
    - ``net_payable`` is never clamped; only ``amount_due`` is.

Failure modes:
    - ``select_gst_report`` raises ``UnknownReportTypeError`` for an unknown
      selector string.  Arithmetic never raises.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import TYPE_CHECKING

from books_kernel.domain.period import DateRange, filter_by_period
from books_kernel.models.tax import Tax, TaxGroup
from books_kernel.models.voucher import (
    GstClassification,
    SupplyType,
    Voucher,
    VoucherType,
)
from books_modules.tax.config import TaxConfig
from books_modules.tax.models import (
    GstRegisterRow,
    GstReport,
    GstReportType,
    GstSummary,
    HsnSummaryRow,
    RateSlab,
    TaxGroupListing,
    TaxLiabilitySummary,
    TaxPosition,
)

if TYPE_CHECKING:
    from books_modules.reporting.models import ReportMetadata

ZERO = Decimal("0")
TWO = Decimal("2")


def split_tax(tax: Decimal, supply_type: str | None) -> tuple[Decimal, Decimal, Decimal]:
    """
    Split a tax amount into ``(cgst, sgst, igst)``.

    Postconditions:
        - Local: ``cgst == sgst == tax / 2`` and ``igst == 0``.
        - Otherwise: ``igst == tax``.
        - ``cgst + sgst + igst == tax``.
    """
    if supply_type == SupplyType.LOCAL:
        half = tax / TWO
        return half, half, ZERO
    return ZERO, ZERO, tax


def build_rate_slabs(vouchers: Iterable[Voucher]) -> tuple[RateSlab, ...]:
    """
    Rate-wise breakdown over every line item of every voucher.

    Lines are keyed by ``igst_rate`` (zero when absent).  The locality of
    the parent voucher decides the CGST/SGST or IGST split.  Slabs are
    ordered by rate, highest first.
    """
    buckets: dict[Decimal, dict[str, Decimal]] = {}
    for voucher in vouchers:
        for line in voucher.items:
            rate = line.igst_rate or ZERO
            bucket = buckets.setdefault(
                rate,
                {"taxable": ZERO, "tax": ZERO, "cgst": ZERO, "sgst": ZERO, "igst": ZERO},
            )
            tax = line.line_tax
            cgst, sgst, igst = split_tax(tax, voucher.supply_type)
            bucket["taxable"] += line.amount
            bucket["tax"] += tax
            bucket["cgst"] += cgst
            bucket["sgst"] += sgst
            bucket["igst"] += igst

    return tuple(
        RateSlab(rate=rate, **buckets[rate])
        for rate in sorted(buckets, reverse=True)
    )


def build_gst_summary(vouchers: Sequence[Voucher]) -> GstSummary:
    """
    Liability and ITC buckets over an already period-filtered voucher list.

    Output vouchers add their taxable value and split their tax into the
    liability columns; Input vouchers add their tax to the ITC columns.
    """
    taxable_value = ZERO
    cgst = sgst = igst = ZERO
    itc_available = ZERO
    itc_cgst = itc_sgst = itc_igst = ZERO

    for voucher in vouchers:
        tax = voucher.tax_amount
        if voucher.gst_classification == GstClassification.OUTPUT:
            taxable_value += voucher.taxable_value
            c, s, i = split_tax(tax, voucher.supply_type)
            cgst += c
            sgst += s
            igst += i
        elif voucher.gst_classification == GstClassification.INPUT:
            itc_available += tax
            c, s, i = split_tax(tax, voucher.supply_type)
            itc_cgst += c
            itc_sgst += s
            itc_igst += i

    total_liability = cgst + sgst + igst
    net_payable = total_liability - itc_available

    return GstSummary(
        taxable_value=taxable_value,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        itc_available=itc_available,
        itc_cgst=itc_cgst,
        itc_sgst=itc_sgst,
        itc_igst=itc_igst,
        total_liability=total_liability,
        net_payable=net_payable,
        amount_due=max(net_payable, ZERO),
        rate_slabs=build_rate_slabs(vouchers),
    )


def build_hsn_summary(
    vouchers: Iterable[Voucher],
    unknown_code: str = "N/A",
    default_uom: str = "Nos",
) -> tuple[HsnSummaryRow, ...]:
    """
    Group all line items by HSN/SAC code.

    Lines without a code fall under ``unknown_code``.  Description and unit
    come from the first line seen for a code; rows keep first-seen order.
    """
    rows: dict[str, dict] = {}
    for voucher in vouchers:
        for line in voucher.items:
            code = line.hsn or unknown_code
            row = rows.get(code)
            if row is None:
                row = {
                    "hsn": code,
                    "description": line.name,
                    "uom": line.unit or default_uom,
                    "qty": ZERO,
                    "taxable": ZERO,
                    "tax_amount": ZERO,
                }
                rows[code] = row
            row["qty"] += line.qty
            row["taxable"] += line.amount
            row["tax_amount"] += line.line_tax

    return tuple(HsnSummaryRow(**row) for row in rows.values())


def build_gst_register(
    vouchers: Iterable[Voucher],
    classification: GstClassification | str,
) -> tuple[GstRegisterRow, ...]:
    """GSTR-1 (Output) or GSTR-2 (Input) register rows, in voucher order."""
    return tuple(
        GstRegisterRow(
            voucher_id=v.voucher_id,
            voucher_date=v.voucher_date,
            party=v.party,
            supply_type=v.supply_type,
            classification=v.gst_classification,
            taxable=v.taxable_value,
            tax=v.tax_amount,
            grand_total=v.amount,
        )
        for v in vouchers
        if v.gst_classification == classification
    )


def build_tax_group_listing(
    taxes: Iterable[Tax],
    tax_groups: Iterable[TaxGroup],
) -> tuple[TaxGroupListing, ...]:
    """Descriptive grouping of the tax masters.  Not used in arithmetic."""
    tax_list = tuple(taxes)
    return tuple(
        TaxGroupListing(
            group_id=group.group_id,
            name=group.name,
            description=group.description,
            tax_names=tuple(t.name for t in tax_list if t.group_id == group.group_id),
        )
        for group in tax_groups
    )


def select_gst_report(
    report_type: GstReportType | str,
    vouchers: Iterable[Voucher],
    period: DateRange,
    taxes: Iterable[Tax] = (),
    tax_groups: Iterable[TaxGroup] = (),
    config: TaxConfig | None = None,
    metadata: ReportMetadata | None = None,
) -> GstReport:
    """
    Build the requested statutory report over ``period``.

    The summary and HSN summary are always computed over the filtered
    vouchers; the register is filled for GSTR-1 and GSTR-2 only.

    Raises:
        UnknownReportTypeError: ``report_type`` names no known report.
    """
    selected = GstReportType.parse(report_type)
    config = config or TaxConfig()
    filtered = filter_by_period(vouchers, period)

    classification = selected.register_classification
    register = (
        build_gst_register(filtered, classification)
        if classification is not None else ()
    )

    return GstReport(
        report_type=selected,
        period=period,
        summary=build_gst_summary(filtered),
        hsn_summary=build_hsn_summary(
            filtered, config.unknown_hsn_code, config.default_uom,
        ),
        vouchers=filtered,
        register=register,
        tax_groups=build_tax_group_listing(taxes, tax_groups),
        metadata=metadata,
    )


def build_tax_liability_summary(
    vouchers: Iterable[Voucher],
    period: DateRange | None = None,
    metadata: ReportMetadata | None = None,
) -> TaxLiabilitySummary:
    """
    Consolidated liability registry.

    Sales Return vouchers reduce output tax and Purchase Return vouchers
    reduce input tax.  Unclassified vouchers are left out.
    """
    if period is not None:
        vouchers = filter_by_period(vouchers, period)

    output_local = output_interstate = ZERO
    input_local = input_interstate = ZERO

    for voucher in vouchers:
        tax = voucher.tax_amount
        if voucher.gst_classification == GstClassification.OUTPUT:
            if voucher.voucher_type == VoucherType.SALES_RETURN:
                tax = -tax
            if voucher.is_local_supply:
                output_local += tax
            else:
                output_interstate += tax
        elif voucher.gst_classification == GstClassification.INPUT:
            if voucher.voucher_type == VoucherType.PURCHASE_RETURN:
                tax = -tax
            if voucher.is_local_supply:
                input_local += tax
            else:
                input_interstate += tax

    total_output = output_local + output_interstate
    total_input = input_local + input_interstate
    net_payable = total_output - total_input

    return TaxLiabilitySummary(
        output_local=output_local,
        output_interstate=output_interstate,
        input_local=input_local,
        input_interstate=input_interstate,
        total_output=total_output,
        total_input=total_input,
        net_payable=net_payable,
        position=TaxPosition.PAYABLE if net_payable >= 0 else TaxPosition.REFUNDABLE,
        period=period,
        metadata=metadata,
    )
