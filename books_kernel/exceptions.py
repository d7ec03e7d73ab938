"""
Typed Exception Hierarchy for the Books Kernel.

===============================================================================
WHAT RAISES AND WHAT DOES NOT
===============================================================================

Report arithmetic NEVER raises. Missing optional numbers default, unknown
voucher types and classifications are excluded by equality, an unbalanced
trial balance is a status flag in the result. Exceptions are reserved for
the edges of the core:

  - selecting a report by an unknown name
  - exporting to an unknown format
  - naming a ledger that is not in the snapshot
  - a tampered audit chain
  - a configuration file that cannot be loaded

Every exception has a class-level CODE attribute (machine-readable) and
carries its context as attributes rather than only in the message.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    BooksKernelError (base)
    |
    +-- ReportError
    |   +-- UnknownReportTypeError
    |   +-- UnsupportedExportFormatError
    |   +-- LedgerNotFoundError
    |
    +-- AuditError
    |   +-- AuditChainBrokenError
    |
    +-- ConfigError
        +-- ConfigLoadError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Report          | UNKNOWN_REPORT_TYPE         | Selector string names no known report
                | UNSUPPORTED_EXPORT_FORMAT   | Export format is not CSV or JSON
                | LEDGER_NOT_FOUND            | Report names a ledger id that is absent
----------------|-----------------------------|-----------------------------------------
Audit           | AUDIT_CHAIN_BROKEN          | Hash chain validation failed
----------------|-----------------------------|-----------------------------------------
Config          | CONFIG_LOAD_FAILED          | Config file missing or not a mapping
"""


class BooksKernelError(Exception):
    """
    Base exception for all books kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BOOKS_KERNEL_ERROR"


# Report-related exceptions


class ReportError(BooksKernelError):
    """Base exception for report selection and export errors."""

    code: str = "REPORT_ERROR"


class UnknownReportTypeError(ReportError):
    """A report selector does not name any known report."""

    code: str = "UNKNOWN_REPORT_TYPE"

    def __init__(self, report_type: str, valid: tuple[str, ...]):
        self.report_type = report_type
        self.valid = valid
        super().__init__(
            f"Unknown report type {report_type!r}; expected one of: "
            f"{', '.join(valid)}"
        )


class UnsupportedExportFormatError(ReportError):
    """The requested export format is not supported."""

    code: str = "UNSUPPORTED_EXPORT_FORMAT"

    def __init__(self, export_format: str):
        self.export_format = export_format
        super().__init__(f"Unsupported export format: {export_format!r}")


class LedgerNotFoundError(ReportError):
    """A report was requested for a ledger that is not in the snapshot."""

    code: str = "LEDGER_NOT_FOUND"

    def __init__(self, ledger_id: str):
        self.ledger_id = ledger_id
        super().__init__(f"Ledger not found: {ledger_id}")


# Audit-related exceptions


class AuditError(BooksKernelError):
    """Base exception for audit trail errors."""

    code: str = "AUDIT_ERROR"


class AuditChainBrokenError(AuditError):
    """
    The audit hash chain does not validate.

    Raised when a stored hash does not match its recomputation or when a
    row's prev_hash does not match its predecessor's hash.
    """

    code: str = "AUDIT_CHAIN_BROKEN"

    def __init__(self, seq: int, expected_hash: str, actual_hash: str):
        self.seq = seq
        self.expected_hash = expected_hash
        self.actual_hash = actual_hash
        super().__init__(
            f"Audit chain broken at seq {seq}: "
            f"expected {expected_hash}, found {actual_hash}"
        )


# Config-related exceptions


class ConfigError(BooksKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIG_ERROR"


class ConfigLoadError(ConfigError):
    """A configuration file could not be loaded."""

    code: str = "CONFIG_LOAD_FAILED"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load config {path}: {reason}")
