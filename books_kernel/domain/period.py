"""
Module: books_kernel.domain.period
Responsibility: Inclusive calendar-date ranges and the period filter used
    by the tax reports.
Architecture position: Kernel > Domain.  Pure value objects, no I/O.

Invariants enforced:
    - Comparison is by calendar date; time-of-day is dropped.
    - Both bounds are inclusive.
    - An inverted range (start > end) is valid and contains no dates.
    - Filtering preserves input order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from books_kernel.models.voucher import Voucher


@dataclass(frozen=True)
class DateRange:
    """Closed interval ``[start, end]`` of calendar dates."""

    start: date
    end: date

    def __post_init__(self) -> None:
        # Normalise datetimes so equality and hashing work on dates
        if isinstance(self.start, datetime):
            object.__setattr__(self, "start", self.start.date())
        if isinstance(self.end, datetime):
            object.__setattr__(self, "end", self.end.date())

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    @property
    def label(self) -> str:
        """Period string used in exported documents."""
        return f"{self.start.isoformat()} to {self.end.isoformat()}"

    def contains(self, value: date | datetime | None) -> bool:
        if value is None:
            return False
        if isinstance(value, datetime):
            value = value.date()
        return self.start <= value <= self.end

    @classmethod
    def parse(cls, start: str, end: str) -> "DateRange":
        """Build a range from two ISO ``YYYY-MM-DD`` strings."""
        return cls(date.fromisoformat(start), date.fromisoformat(end))


def filter_by_period(
    vouchers: Iterable[Voucher],
    period: DateRange,
) -> tuple[Voucher, ...]:
    """Vouchers dated inside ``period``; undated vouchers are dropped."""
    return tuple(v for v in vouchers if period.contains(v.voucher_date))
