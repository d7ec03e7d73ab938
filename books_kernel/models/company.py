"""
Module: books_kernel.models.company
Responsibility: The slice of the company profile the reporting core reads.
Architecture position: Kernel > Models.  Pure value objects, no I/O.

Company create/edit/restore/delete/split-year workflows live outside the
core; they hand it a Company and record their own audit entries through
``books_kernel.services.auditor_service``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Company:
    """Company identity used in report headers and exports."""

    company_id: str
    name: str
    state: str = ""
    currency: str = ""
    tax_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Company":
        return cls(
            company_id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            state=str(data.get("state") or ""),
            currency=str(data.get("currency") or ""),
            tax_id=data.get("taxId"),
        )
