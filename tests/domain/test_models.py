"""
Model construction tests: upstream mappings into frozen value objects.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from books_kernel.models.item import Item
from books_kernel.models.ledger import BalanceSide, Ledger
from books_kernel.models.snapshot import BooksSnapshot
from books_kernel.models.voucher import SupplyType, Voucher
from books_kernel.utils.coercion import (
    to_calendar_date,
    to_decimal,
    to_optional_decimal,
)
from tests.factories import make_line, make_voucher


class TestCoercion:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (100, Decimal("100")),
            ("12.50", Decimal("12.50")),
            (0.1, Decimal("0.1")),
            (None, Decimal("0")),
            ("abc", Decimal("0")),
            (True, Decimal("0")),
        ],
    )
    def test_to_decimal(self, raw, expected):
        assert to_decimal(raw) == expected

    def test_to_optional_decimal_keeps_absence(self):
        assert to_optional_decimal(None) is None
        assert to_optional_decimal("") is None
        assert to_optional_decimal("x") is None
        assert to_optional_decimal("0") == Decimal("0")

    @pytest.mark.parametrize(
        "raw",
        [
            float("nan"), float("inf"), "NaN", "Infinity", "-inf",
            Decimal("NaN"), Decimal("-Infinity"),
        ],
    )
    def test_non_finite_values_are_rejected(self, raw):
        assert to_decimal(raw) == Decimal("0")
        assert to_decimal(raw, Decimal("7")) == Decimal("7")
        assert to_optional_decimal(raw) is None

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2024-03-05", date(2024, 3, 5)),
            ("2024-03-05T23:59:00.000Z", date(2024, 3, 5)),
            (datetime(2024, 3, 5, 10, 0), date(2024, 3, 5)),
            (date(2024, 3, 5), date(2024, 3, 5)),
            ("not a date", None),
            ("", None),
            (None, None),
            (20240305, None),
        ],
    )
    def test_to_calendar_date(self, raw, expected):
        assert to_calendar_date(raw) == expected


class TestBalanceSide:

    @pytest.mark.parametrize("raw", ["Credit", "credit", "Cr", " CR "])
    def test_credit_markers(self, raw):
        assert BalanceSide.parse(raw) is BalanceSide.CREDIT

    @pytest.mark.parametrize("raw", ["Debit", "Dr", "", None, "anything"])
    def test_everything_else_is_debit(self, raw):
        assert BalanceSide.parse(raw) is BalanceSide.DEBIT


class TestLedgerFromDict:

    def test_camel_case_keys(self):
        ledger = Ledger.from_dict({
            "id": "L1",
            "name": "Cash",
            "type": "Debit",
            "openingBalance": 2500,
            "group": "Cash-in-hand",
        })
        assert ledger.ledger_id == "L1"
        assert ledger.side is BalanceSide.DEBIT
        assert ledger.opening_balance == Decimal("2500")
        assert ledger.group == "Cash-in-hand"
        assert ledger.budget is None
        assert ledger.is_debit

    def test_missing_opening_balance_is_zero(self):
        ledger = Ledger.from_dict({"id": "L1", "type": "Credit"})
        assert ledger.opening_balance == Decimal("0")
        assert not ledger.is_debit


class TestVoucher:

    def test_taxable_value_defaults_to_amount(self):
        v = make_voucher("V1", amount=118)
        assert v.taxable_value == Decimal("118")
        assert v.tax_amount == Decimal("0")

    def test_sub_total_and_tax_total_win_when_present(self):
        v = make_voucher(
            "V1", amount=118,
            sub_total=Decimal("100"), tax_total=Decimal("18"),
        )
        assert v.taxable_value == Decimal("100")
        assert v.tax_amount == Decimal("18")

    def test_zero_sub_total_is_not_absent(self):
        v = make_voucher("V1", amount=50, sub_total=Decimal("0"))
        assert v.taxable_value == Decimal("0")

    def test_line_tax_defaults_to_zero(self):
        assert make_line("I1", 2).line_tax == Decimal("0")
        assert make_line("I1", 2, tax_amount=9).line_tax == Decimal("9")

    def test_from_dict(self):
        v = Voucher.from_dict({
            "id": "V9",
            "type": "Sales",
            "date": "2024-01-15T10:00:00Z",
            "amount": "1180",
            "subTotal": 1000,
            "taxTotal": 180,
            "ledgerId": "L1",
            "party": "Globex",
            "supplyType": "Local",
            "gstClassification": "Output",
            "items": [{"id": "x", "itemId": "I1", "qty": 2, "amount": 1000, "hsn": "8471"}],
        })
        assert v.voucher_date == date(2024, 1, 15)
        assert v.amount == Decimal("1180")
        assert v.taxable_value == Decimal("1000")
        assert v.ledger_id == "L1"
        assert v.is_local_supply
        assert v.items[0].qty == Decimal("2")
        assert v.items[0].hsn == "8471"
        assert v.status == "Posted"

    def test_central_supply_is_interstate(self):
        v = Voucher.from_dict({"id": "V1", "supplyType": "Central"})
        assert v.supply_type == SupplyType.INTERSTATE

    def test_unknown_type_is_kept_verbatim(self):
        v = Voucher.from_dict({"id": "V1", "type": "Credit Note"})
        assert v.voucher_type == "Credit Note"

    def test_empty_ledger_id_means_unposted(self):
        v = Voucher.from_dict({"id": "V1", "ledgerId": ""})
        assert v.ledger_id is None

    def test_touches_ledger_checks_every_leg(self):
        v = Voucher.from_dict({
            "id": "V1",
            "type": "Journal",
            "entries": [
                {"ledgerId": "L1", "type": "Dr", "amount": 10},
                {"ledgerId": "L2", "type": "Cr", "amount": 10},
            ],
        })
        assert v.touches_ledger("L2")
        assert not v.touches_ledger("L3")


class TestItem:

    def test_from_dict(self):
        item = Item.from_dict({
            "id": "I1", "name": "Laptop", "salePrice": "45000", "gstRate": 18,
        })
        assert item.sale_price == Decimal("45000")
        assert item.name == "Laptop"


class TestSnapshot:

    def test_capture_copies_into_tuples(self, company):
        vouchers = [make_voucher("V1")]
        snapshot = BooksSnapshot.capture(company, vouchers=vouchers)
        vouchers.append(make_voucher("V2"))
        assert isinstance(snapshot.vouchers, tuple)
        assert len(snapshot.vouchers) == 1

    def test_constructor_copies_into_tuples(self, company):
        vouchers = [make_voucher("V1", "Receipt", 100)]
        snapshot = BooksSnapshot(company=company, vouchers=vouchers)
        vouchers.append(make_voucher("V2", "Receipt", 900))
        assert isinstance(snapshot.vouchers, tuple)
        assert len(snapshot.vouchers) == 1

    def test_from_dict(self):
        snapshot = BooksSnapshot.from_dict({
            "company": {"id": "C1", "name": "Acme", "currency": "INR"},
            "ledgers": [{"id": "L1", "type": "Debit"}],
            "vouchers": [{"id": "V1", "type": "Receipt", "amount": 5}],
        })
        assert snapshot.company.name == "Acme"
        assert len(snapshot.ledgers) == 1
        assert snapshot.vouchers[0].amount == Decimal("5")
        assert snapshot.items == ()
