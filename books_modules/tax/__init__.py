"""
Tax Module.

Responsibility:
    GST-style statutory reports: output liability against input tax
    credit (GSTR-3B), outward and inward registers (GSTR-1, GSTR-2), the
    HSN/SAC summary and the consolidated liability registry.

Invariants:
    - All monetary amounts use ``Decimal`` -- NEVER ``float``.
    - Vouchers are bucketed by equality on ``gst_classification`` and
      ``supply_type``; unknown values never raise.
    - Tax and tax-group masters are descriptive only.

Failure modes:
    - ``GstReportType.parse`` raises ``UnknownReportTypeError`` for an
      unknown selector string.
    - ``TaxConfig.__post_init__`` raises ``ValueError`` for blank codes.
"""

from books_modules.tax.config import TaxConfig
from books_modules.tax.helpers import (
    build_gst_register,
    build_gst_summary,
    build_hsn_summary,
    build_rate_slabs,
    build_tax_group_listing,
    build_tax_liability_summary,
    select_gst_report,
    split_tax,
)
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

__all__ = [
    "TaxConfig",
    "GstReportType",
    "GstReport",
    "GstSummary",
    "GstRegisterRow",
    "HsnSummaryRow",
    "RateSlab",
    "TaxGroupListing",
    "TaxLiabilitySummary",
    "TaxPosition",
    "build_gst_summary",
    "build_rate_slabs",
    "build_hsn_summary",
    "build_gst_register",
    "build_tax_group_listing",
    "build_tax_liability_summary",
    "select_gst_report",
    "split_tax",
]
