"""
Module: books_kernel.domain.balance
Responsibility: The balance engine -- a ledger's running balance from its
    opening balance plus every voucher posted against it.
Architecture position: Kernel > Domain.  Pure functions, no I/O, no state.

Invariants enforced:
    - The result is independent of voucher order (plain Decimal addition).
    - With no matching vouchers the result equals the opening balance.
    - Debit ledgers add each voucher amount; every other ledger subtracts.
    - Negative amounts are not rejected; they are summed arithmetically.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from books_kernel.models.ledger import Ledger
from books_kernel.models.voucher import Voucher


def compute_balance(ledger: Ledger, vouchers: Iterable[Voucher]) -> Decimal:
    """
    Balance of ``ledger`` after every voucher whose ``ledger_id`` matches.

    Vouchers without a ledger id, or posted to another ledger, are ignored.
    """
    balance = ledger.opening_balance
    for voucher in vouchers:
        if voucher.ledger_id != ledger.ledger_id:
            continue
        if ledger.is_debit:
            balance += voucher.amount
        else:
            balance -= voucher.amount
    return balance


def compute_balances(
    ledgers: Iterable[Ledger],
    vouchers: Iterable[Voucher],
) -> dict[str, Decimal]:
    """Map of ledger id to balance, one ``compute_balance`` per ledger."""
    voucher_list = tuple(vouchers)
    return {
        ledger.ledger_id: compute_balance(ledger, voucher_list)
        for ledger in ledgers
    }
