"""
Tax Domain Models.

Frozen value objects for the GST-style statutory reports: the
liability/ITC summary, its rate-wise slabs, HSN/SAC summary rows,
GSTR-1/GSTR-2 register rows and the consolidated liability registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from books_kernel.domain.period import DateRange
from books_kernel.exceptions import UnknownReportTypeError
from books_kernel.logging_config import get_logger
from books_kernel.models.voucher import GstClassification, Voucher

if TYPE_CHECKING:
    from books_modules.reporting.models import ReportMetadata

logger = get_logger("modules.tax.models")


class GstReportType(str, Enum):
    """Selectable statutory tax reports."""

    GSTR_1 = "GSTR-1"  # outward supplies (Output vouchers)
    GSTR_2 = "GSTR-2"  # inward supplies (Input vouchers)
    GSTR_3B = "GSTR-3B"  # liability/ITC summary
    HSN_SUMMARY = "HSN-SUMMARY"

    @property
    def register_classification(self) -> GstClassification | None:
        """Classification listed in this report's register, if it has one."""
        if self is GstReportType.GSTR_1:
            return GstClassification.OUTPUT
        if self is GstReportType.GSTR_2:
            return GstClassification.INPUT
        return None

    @classmethod
    def parse(cls, value: "GstReportType | str") -> "GstReportType":
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
            logger.warning("unknown_gst_report_type", extra={"report_type": value})
            raise UnknownReportTypeError(
                str(value), tuple(t.value for t in cls),
            ) from None


class TaxPosition(str, Enum):
    """Net settlement direction."""

    PAYABLE = "payable"
    REFUNDABLE = "refundable"


@dataclass(frozen=True)
class RateSlab:
    """Line-item totals for one tax rate."""

    rate: Decimal
    taxable: Decimal
    tax: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal


@dataclass(frozen=True)
class GstSummary:
    """
    Output liability against input tax credit.

    ``net_payable`` may be negative (credit carried forward);
    ``amount_due`` is its presentation clamp at zero.
    """

    taxable_value: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    itc_available: Decimal
    itc_cgst: Decimal
    itc_sgst: Decimal
    itc_igst: Decimal
    total_liability: Decimal  # cgst + sgst + igst
    net_payable: Decimal  # total_liability - itc_available
    amount_due: Decimal  # max(net_payable, 0)
    rate_slabs: tuple[RateSlab, ...] = ()


@dataclass(frozen=True)
class HsnSummaryRow:
    """Line items aggregated under one HSN/SAC code."""

    hsn: str
    description: str
    uom: str
    qty: Decimal
    taxable: Decimal
    tax_amount: Decimal


@dataclass(frozen=True)
class GstRegisterRow:
    """One voucher in a GSTR-1 or GSTR-2 register."""

    voucher_id: str
    voucher_date: date | None
    party: str
    supply_type: str | None
    classification: str | None
    taxable: Decimal
    tax: Decimal
    grand_total: Decimal


@dataclass(frozen=True)
class TaxGroupListing:
    """A tax group with the names of the tax masters filed under it."""

    group_id: str
    name: str
    description: str | None
    tax_names: tuple[str, ...]


@dataclass(frozen=True)
class GstReport:
    """The selected statutory report for one period."""

    report_type: GstReportType
    period: DateRange
    summary: GstSummary
    hsn_summary: tuple[HsnSummaryRow, ...]
    vouchers: tuple[Voucher, ...]  # period-filtered raw listing
    register: tuple[GstRegisterRow, ...]  # empty for GSTR-3B and HSN-SUMMARY
    tax_groups: tuple[TaxGroupListing, ...] = ()
    metadata: ReportMetadata | None = None


@dataclass(frozen=True)
class TaxLiabilitySummary:
    """Consolidated liability registry, net of sales and purchase returns."""

    output_local: Decimal  # CGST + SGST
    output_interstate: Decimal  # IGST
    input_local: Decimal
    input_interstate: Decimal
    total_output: Decimal
    total_input: Decimal
    net_payable: Decimal
    position: TaxPosition
    period: DateRange | None = None
    metadata: ReportMetadata | None = None
