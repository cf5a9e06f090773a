from __future__ import annotations

from decimal import Decimal

from ledger.aggregator import Summary
from ledger.models import EXPENSE
from ledger.presenter import NEGATIVE, POSITIVE, build_row, build_summary, order_for_display
from ledger.text import KHMER
from helpers import make_transaction


def test_later_date_is_shown_first_regardless_of_insertion_order():
    older = make_transaction("1", on="2024-01-02")
    newer = make_transaction("2", on="2024-01-03")
    assert order_for_display([older, newer]) == [newer, older]
    assert order_for_display([newer, older]) == [newer, older]


def test_time_breaks_ties_within_a_date():
    morning = make_transaction("1", at="08:00")
    evening = make_transaction("2", at="19:30")
    assert order_for_display([evening, morning]) == [evening, morning]


def test_identical_instants_show_later_insertion_first():
    first = make_transaction("1")
    second = make_transaction("2")
    assert [t.id for t in order_for_display([first, second])] == ["2", "1"]


def test_missing_time_sorts_as_midnight():
    untimed = make_transaction("1", at=None)
    timed = make_transaction("2", at="00:01")
    assert order_for_display([untimed, timed]) == [timed, untimed]


def test_row_carries_signed_amount_style_and_delete_id():
    row = build_row(make_transaction("7", "1234.5", kind=EXPENSE, at="09:05", description="Rent"))
    assert row.delete_id == "7"
    assert row.amount == "-1,234.50"
    assert row.amount_style == "expense"
    assert row.type_label == "Expense"
    assert row.time == "09:05"
    assert row.description == "Rent"


def test_row_uses_display_text_pack():
    row = build_row(make_transaction("1", "1000", at=None), KHMER)
    assert row.amount == "+1,000.00 ៛"
    assert row.type_label == "ចំណូល"
    assert row.time == ""


def test_balance_state_follows_sign():
    zero = build_summary(Summary.empty())
    negative = build_summary(Summary(Decimal("1"), Decimal("2"), Decimal("-1")))
    assert zero.balance_state == POSITIVE
    assert negative.balance_state == NEGATIVE
    assert negative.balance == "-1.00"


def test_empty_list_shows_placeholder(presenter, surfaces):
    rows, _, _ = surfaces
    presenter.refresh([])
    assert rows.placeholder == "No transactions yet."
    assert rows.rows == []


def test_refresh_renders_rows_and_identical_panels(presenter, surfaces):
    rows, top, bottom = surfaces
    presenter.refresh([
        make_transaction("1", "1000", on="2024-01-01"),
        make_transaction("2", "400", kind=EXPENSE, on="2024-01-02"),
    ])
    assert [row.delete_id for row in rows.rows] == ["2", "1"]
    assert rows.placeholder is None
    assert top.last == bottom.last
    assert top.last.balance == "600.00"
