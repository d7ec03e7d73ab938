"""
Balance engine tests.

Opening balance plus postings, with the side convention applied once.
"""

from decimal import Decimal

from books_kernel.domain.balance import compute_balance, compute_balances
from books_kernel.models.ledger import BalanceSide
from tests.factories import make_ledger, make_voucher


class TestComputeBalance:
    """compute_balance()."""

    def test_no_vouchers_returns_opening_balance(self):
        ledger = make_ledger("L1", opening=1000)
        assert compute_balance(ledger, []) == Decimal("1000")

    def test_debit_ledger_adds_amounts(self):
        ledger = make_ledger("L1", side=BalanceSide.DEBIT, opening=100)
        vouchers = [
            make_voucher("V1", amount=50, ledger_id="L1"),
            make_voucher("V2", amount=25, ledger_id="L1"),
        ]
        assert compute_balance(ledger, vouchers) == Decimal("175")

    def test_credit_ledger_subtracts_amounts(self):
        ledger = make_ledger("L1", side=BalanceSide.CREDIT, opening=100)
        vouchers = [make_voucher("V1", amount=30, ledger_id="L1")]
        assert compute_balance(ledger, vouchers) == Decimal("70")

    def test_ignores_other_ledgers_and_unposted_vouchers(self):
        ledger = make_ledger("L1", opening=10)
        vouchers = [
            make_voucher("V1", amount=500, ledger_id="L2"),
            make_voucher("V2", amount=700),  # no ledger_id
        ]
        assert compute_balance(ledger, vouchers) == Decimal("10")

    def test_negative_amount_is_summed_arithmetically(self):
        ledger = make_ledger("L1", opening=100)
        vouchers = [make_voucher("V1", amount=-40, ledger_id="L1")]
        assert compute_balance(ledger, vouchers) == Decimal("60")

    def test_exact_decimal_addition(self):
        ledger = make_ledger("L1", opening="0.1")
        vouchers = [make_voucher("V1", amount="0.2", ledger_id="L1")]
        assert compute_balance(ledger, vouchers) == Decimal("0.3")


class TestComputeBalances:
    """compute_balances()."""

    def test_one_entry_per_ledger(self):
        ledgers = [
            make_ledger("L1", opening=100),
            make_ledger("L2", side=BalanceSide.CREDIT, opening=100),
        ]
        vouchers = [
            make_voucher("V1", amount=10, ledger_id="L1"),
            make_voucher("V2", amount=10, ledger_id="L2"),
        ]
        assert compute_balances(ledgers, vouchers) == {
            "L1": Decimal("110"),
            "L2": Decimal("90"),
        }

    def test_accepts_a_generator_of_vouchers(self):
        ledgers = [make_ledger("L1"), make_ledger("L2")]
        vouchers = (make_voucher(f"V{i}", amount=1, ledger_id="L2") for i in range(3))
        assert compute_balances(ledgers, vouchers)["L2"] == Decimal("3")
