"""
Pure domain layer.

Balance engine, period filter and the injectable clock.  Nothing here
touches the database or performs I/O; every function is deterministic.
"""

from books_kernel.domain.balance import compute_balance, compute_balances
from books_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from books_kernel.domain.period import DateRange, filter_by_period

__all__ = [
    "compute_balance",
    "compute_balances",
    "Clock",
    "SystemClock",
    "DeterministicClock",
    "DateRange",
    "filter_by_period",
]
