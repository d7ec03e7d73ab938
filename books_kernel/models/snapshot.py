"""
Module: books_kernel.models.snapshot
Responsibility: An immutable snapshot of one company's books.

Every report is computed from scratch over a consistent snapshot.  Building
the snapshot, through ``capture`` or the constructor, copies the caller's
collections into tuples, so later edits to
the caller's lists cannot leak into a computation that is in progress.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from books_kernel.models.company import Company
from books_kernel.models.item import Item
from books_kernel.models.ledger import Ledger
from books_kernel.models.tax import Tax, TaxGroup
from books_kernel.models.voucher import Voucher


@dataclass(frozen=True)
class BooksSnapshot:
    """Ledgers, vouchers, items and tax masters of one company."""

    company: Company
    ledgers: tuple[Ledger, ...] = ()
    vouchers: tuple[Voucher, ...] = ()
    items: tuple[Item, ...] = ()
    taxes: tuple[Tax, ...] = ()
    tax_groups: tuple[TaxGroup, ...] = ()

    def __post_init__(self) -> None:
        for name in ("ledgers", "vouchers", "items", "taxes", "tax_groups"):
            object.__setattr__(self, name, tuple(getattr(self, name)))

    @classmethod
    def capture(
        cls,
        company: Company,
        ledgers: Iterable[Ledger] = (),
        vouchers: Iterable[Voucher] = (),
        items: Iterable[Item] = (),
        taxes: Iterable[Tax] = (),
        tax_groups: Iterable[TaxGroup] = (),
    ) -> "BooksSnapshot":
        """Copy the given collections into an immutable snapshot."""
        return cls(
            company=company,
            ledgers=tuple(ledgers),
            vouchers=tuple(vouchers),
            items=tuple(items),
            taxes=tuple(taxes),
            tax_groups=tuple(tax_groups),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BooksSnapshot":
        """Build a snapshot from the workspace's JSON-like state."""
        return cls(
            company=Company.from_dict(data.get("company") or {}),
            ledgers=tuple(Ledger.from_dict(d) for d in data.get("ledgers") or ()),
            vouchers=tuple(Voucher.from_dict(d) for d in data.get("vouchers") or ()),
            items=tuple(Item.from_dict(d) for d in data.get("items") or ()),
            taxes=tuple(Tax.from_dict(d) for d in data.get("taxes") or ()),
            tax_groups=tuple(
                TaxGroup.from_dict(d) for d in data.get("taxGroups") or ()
            ),
        )
