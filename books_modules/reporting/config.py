"""
Reporting Configuration Schema.

Defines the ledger-group classification rules and report formatting
options.  Ledgers are classified by keyword tests on their free-text
``group`` (e.g. "Cash-in-hand", "Sundry Debtors", "Secured Loans").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self

from books_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")

_KEYWORD_FIELDS = (
    "asset_group_keywords",
    "fixed_asset_keywords",
    "equity_keywords",
    "long_term_liability_keywords",
)


def _keyword_tuple(name: str, keywords) -> tuple[str, ...]:
    # A bare string would split into characters; "" would match every group.
    if isinstance(keywords, str):
        raise ValueError(f"{name} must be a list of keywords, not a string")
    result = tuple(keywords)
    for keyword in result:
        if not isinstance(keyword, str) or not keyword.strip():
            raise ValueError(f"{name} contains an empty or non-text keyword")
    return result


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    ``asset_group_keywords`` decides the asset/liability split of the
    balance sheet and is matched case-sensitively as a substring of the
    ledger group.  The remaining keyword sets only choose presentation
    sections and are matched case-insensitively.
    """

    # Entity name shown on reports when the snapshot has none
    entity_name: str = "Company"

    # Default currency for reports
    default_currency: str = "INR"

    # Balance sheet -- asset/liability split
    asset_group_keywords: tuple[str, ...] = (
        "Assets",
        "Bank Accounts",
        "Cash-in-hand",
        "Sundry Debtors",
    )

    # Balance sheet -- presentation sections
    fixed_asset_keywords: tuple[str, ...] = ("fixed", "investment")
    equity_keywords: tuple[str, ...] = ("capital", "reserve", "equity")
    long_term_liability_keywords: tuple[str, ...] = ("loan", "secured")

    # Whether ledgers with a zero balance are listed
    include_zero_balances: bool = True

    # Field delimiter for tabular exports
    csv_delimiter: str = ","

    def __post_init__(self):
        if not self.asset_group_keywords:
            raise ValueError("asset_group_keywords cannot be empty")
        if len(self.csv_delimiter) != 1:
            raise ValueError("csv_delimiter must be a single character")
        if not self.default_currency:
            raise ValueError("default_currency cannot be empty")
        # YAML and JSON produce lists; keep the frozen tuple form
        for name in _KEYWORD_FIELDS:
            setattr(self, name, _keyword_tuple(name, getattr(self, name)))

    def is_asset_group(self, group: str) -> bool:
        """True when ``group`` contains any asset keyword."""
        return any(keyword in group for keyword in self.asset_group_keywords)

    @staticmethod
    def mentions(group: str, keywords: tuple[str, ...]) -> bool:
        """Case-insensitive keyword test used for presentation sections."""
        lowered = group.lower()
        return any(keyword.lower() in lowered for keyword in keywords)

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary."""
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
