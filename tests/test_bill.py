from decimal import Decimal

import pytest

from studio_pos.core.errors import InvalidDiscountError, InvalidItemError
from studio_pos.domain.pos.bill import Bill, Product


def _snapshot(bill):
    return [(i.id, i.name, i.qty, i.rate) for i in bill.items]


def test_newborn_package_with_prints_and_ten_percent_discount():
    bill = Bill()
    bill.add_item("Newborn Package", 15000, 1)
    bill.add_item("Extra Print", 200, 3)
    bill.set_discount_percent(10)

    totals = bill.totals()
    assert totals.subtotal == Decimal("15600")
    assert totals.discount_amount == Decimal("1560")
    assert totals.grand_total == Decimal("14040")


def test_subtotal_follows_adds_and_removes():
    bill = Bill()
    first = bill.add_item("Cake Smash", "4500", 1)
    bill.add_item("Frame", "750.50", 2)
    third = bill.add_item("Album", 3000, 1)
    assert bill.totals().subtotal == Decimal("9001.00")

    bill.remove_item(first.id)
    assert bill.totals().subtotal == Decimal("4501.00")

    bill.remove_item(third.id)
    assert bill.totals().subtotal == sum(i.qty * i.rate for i in bill.items)
    assert bill.totals().subtotal == Decimal("1501.00")


def test_amount_is_derived_from_qty_and_rate():
    bill = Bill()
    item = bill.add_item("Extra Print", 200, 3)
    item.qty = 5
    assert item.amount == Decimal("1000")
    assert bill.totals().subtotal == Decimal("1000")


@pytest.mark.parametrize("name, rate, qty", [
    ("", 100, 1),
    ("   ", 100, 1),
    ("Frame", 0, 1),
    ("Frame", -5, 1),
    ("Frame", "abc", 1),
    ("Frame", 100, 0),
    ("Frame", 100, 1.5),
])
def test_invalid_item_is_rejected_without_touching_the_bill(name, rate, qty):
    bill = Bill()
    bill.add_item("Album", 3000, 1)
    before = _snapshot(bill)

    with pytest.raises(InvalidItemError):
        bill.add_item(name, rate, qty)

    assert _snapshot(bill) == before


def test_add_item_resets_pending_fields():
    bill = Bill()
    bill.select_catalog_item(Product(name="Maternity Shoot", rate=Decimal("8000")))
    assert (bill.pending_name, bill.pending_rate, bill.pending_qty) == ("Maternity Shoot", Decimal("8000"), 1)
    assert bill.items == []

    bill.add_item(bill.pending_name, bill.pending_rate, 2)

    assert (bill.pending_name, bill.pending_rate, bill.pending_qty) == ("", Decimal("0"), 1)
    assert bill.items[0].amount == Decimal("16000")


def test_removing_unknown_item_changes_nothing():
    bill = Bill()
    bill.add_item("Album", 3000, 1)
    bill.add_item("Frame", 750, 2)
    before = _snapshot(bill)

    assert bill.remove_item("does-not-exist") is False
    assert _snapshot(bill) == before


def test_item_ids_are_unique():
    bill = Bill()
    ids = {bill.add_item("Print", 10, 1).id for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.parametrize("percent", ["0", "12.5", "33.33", "100"])
def test_grand_total_matches_discount_formula(percent):
    bill = Bill()
    bill.add_item("Newborn Package", 15000, 1)
    bill.add_item("Extra Print", 200, 3)
    bill.set_discount_percent(percent)

    totals = bill.totals()
    pct = Decimal(percent)
    assert totals.grand_total == totals.subtotal * (1 - pct / 100)
    assert totals.grand_total >= 0


@pytest.mark.parametrize("percent", [-1, "100.01", 250, "NaN", "ten"])
def test_out_of_range_discount_is_rejected(percent):
    bill = Bill()
    bill.add_item("Album", 3000, 1)
    bill.set_discount_percent(20)

    with pytest.raises(InvalidDiscountError):
        bill.set_discount_percent(percent)

    assert bill.discount_percent == Decimal("20")
    assert bill.totals().grand_total == Decimal("2400")


def test_clear_resets_everything():
    bill = Bill()
    bill.set_customer(" Asha ", " 9000000001 ")
    bill.add_item("Album", 3000, 1)
    bill.set_discount_percent(5)
    bill.select_catalog_item(Product(name="Frame", rate=Decimal("750")))

    bill.clear()

    assert bill.customer_name == ""
    assert bill.customer_phone == ""
    assert bill.items == []
    assert bill.discount_percent == 0
    assert bill.pending_name == ""
    assert bill.totals().grand_total == 0


def test_set_customer_strips_input():
    bill = Bill()
    bill.set_customer("  Asha Rao ", " 9000000001")
    assert bill.customer_name == "Asha Rao"
    assert bill.customer_phone == "9000000001"
