"""
Tax Configuration Schema.

Defines the presentation defaults of the GST-style reports.  The tax
arithmetic itself is fixed (50/50 local split, whole interstate amount)
and is not configurable.
"""

from dataclasses import dataclass
from typing import Self

from books_kernel.logging_config import get_logger

logger = get_logger("modules.tax.config")


@dataclass
class TaxConfig:
    """
    Configuration schema for the tax module.

        config = TaxConfig(unknown_hsn_code="UNCLASSIFIED")
    """

    # HSN/SAC bucket for line items without a code
    unknown_hsn_code: str = "N/A"

    # Unit of measure shown when the first line of a code has none
    default_uom: str = "Nos"

    def __post_init__(self):
        if not self.unknown_hsn_code or not self.unknown_hsn_code.strip():
            raise ValueError("unknown_hsn_code cannot be empty")
        if not self.default_uom or not self.default_uom.strip():
            raise ValueError("default_uom cannot be empty")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("tax_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary."""
        logger.info(
            "tax_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
