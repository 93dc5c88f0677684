from datetime import date
from decimal import Decimal

import pytest

from app.utils.ledger_calculations import (
    add_months,
    due_window,
    guaranteed_split,
    installment_amount,
    installments,
    money,
    months_elapsed,
    paid_window_start,
    premium_arrears,
)


def test_money_rounds_half_up_and_handles_none():
    assert money(None) == Decimal("0.00")
    assert money("2.345") == Decimal("2.35")
    assert money(1.005) == Decimal("1.01")
    assert str(money(3)) == "3.00"


def test_add_months_rolls_over_year():
    assert add_months(date(2024, 11, 20), 1) == date(2024, 12, 1)
    assert add_months(date(2024, 11, 20), 2) == date(2025, 1, 1)
    assert add_months(date(2024, 12, 31), 14) == date(2026, 2, 1)


@pytest.mark.parametrize(
    "paid_on, expected",
    [
        (date(2024, 1, 5), (date(2024, 2, 4), date(2024, 3, 4), date(2024, 4, 4))),
        (date(2024, 1, 10), (date(2024, 2, 4), date(2024, 3, 4), date(2024, 4, 4))),
        (date(2024, 1, 11), (date(2024, 3, 3), date(2024, 4, 3), date(2024, 5, 3))),
        (date(2024, 11, 20), (date(2025, 1, 3), date(2025, 2, 3), date(2025, 3, 3))),
        (date(2024, 12, 1), (date(2025, 1, 4), date(2025, 2, 4), date(2025, 3, 4))),
    ],
)
def test_installments(paid_on, expected):
    assert installments(paid_on) == expected


def test_installments_are_one_calendar_month_apart():
    for paid_on in (date(2024, 3, 2), date(2024, 3, 28)):
        d1, d2, d3 = installments(paid_on)
        assert add_months(d1, 1) == d2.replace(day=1)
        assert add_months(d2, 1) == d3.replace(day=1)
        assert d1.day == d2.day == d3.day


def test_late_payment_schedule_starts_one_month_later():
    early = installments(date(2024, 6, 10))
    late = installments(date(2024, 6, 11))
    assert late[0].month == early[1].month
    assert (early[0].day, late[0].day) == (4, 3)


def test_installment_amount():
    assert installment_amount(3000) == Decimal("1300.00")
    assert installment_amount(Decimal("1000")) == Decimal("433.33")
    assert installment_amount(1000, Decimal("1")) == Decimal("333.33")


def test_windows():
    assert due_window(date(2024, 2, 15)) == (date(2024, 3, 3), date(2024, 3, 4))
    assert due_window(date(2024, 12, 31)) == (date(2025, 1, 3), date(2025, 1, 4))
    assert paid_window_start(date(2024, 2, 15)) == date(2024, 2, 2)


def test_months_elapsed():
    baseline = date(2024, 12, 1)
    assert months_elapsed(date(2024, 12, 25), baseline) == 0
    assert months_elapsed(date(2025, 3, 1), baseline) == 3
    # before the baseline the count goes negative
    assert months_elapsed(date(2024, 6, 1), baseline) == -6


def test_premium_arrears_formula():
    # (5000 - 1000) - (4 * 1000 + 1000) * 2
    assert premium_arrears(5000, 4, 2, Decimal("1000"), Decimal("1000")) == Decimal("-6000.00")
    assert premium_arrears(2000, 0, 1, Decimal("1000"), Decimal("1000")) == Decimal("0.00")


def test_guaranteed_split_formula():
    assert guaranteed_split(2000, Decimal("1000")) == Decimal("1300.00")
    assert guaranteed_split("1000.004", Decimal("1000")) == Decimal("0.00")
