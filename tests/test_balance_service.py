from datetime import date
from decimal import Decimal

import pytest

from app.models import Receivable, Request
from app.schemas import PaymentCreate, PremiumCreate, RequestCreate
from app.services import balance_service, ledger_service


def add_request(db, amount, on, member="Max"):
    return ledger_service.create_request(
        db, RequestCreate(request_date=on, member=member, client="C1", amount=amount, payday=5)
    )


def add_payment(db, request_id, amount, on, member="Max"):
    return ledger_service.create_payment(
        db,
        PaymentCreate(payment_date=on, member=member, client="C1", amount=amount, request_id=request_id),
    )


def add_premium(db, amount, on=date(2024, 12, 1), member="Max"):
    return ledger_service.create_premium(
        db, PremiumCreate(payment_date=on, member=member, amount=amount, bank_fees="0")
    )


def test_every_metric_is_zero_without_rows(db):
    today = date(2025, 6, 15)
    zero = Decimal("0")

    assert balance_service.atb(db, "Nobody") == zero
    assert balance_service.total_disbursed(db, "Nobody") == zero
    assert balance_service.total_paid(db, "Nobody") == zero
    assert balance_service.total_outstanding(db, "Nobody") == zero
    assert balance_service.arrears_amount(db, "Nobody") == zero
    assert balance_service.expected_amount(db, "Nobody", today=today) == zero
    assert balance_service.premium_arrears(db, "Nobody", today=today, heads={"Nobody": 3}) == zero
    assert balance_service.guaranteed_split(db, "Nobody") == zero


def test_atb(db):
    add_premium(db, "1000")
    request_id = add_request(db, "3000", date(2024, 1, 5))
    add_payment(db, request_id, "500", date(2024, 2, 4))

    assert balance_service.atb(db, "Max") == Decimal("-1500.00")


def test_totals_are_scoped_to_member(db):
    add_request(db, "3000", date(2024, 1, 5))
    add_request(db, "250.50", date(2024, 1, 6))
    other = add_request(db, "9999", date(2024, 1, 6), member="Vusi")
    add_payment(db, other, "100", date(2024, 2, 4), member="Vusi")

    assert balance_service.total_disbursed(db, "Max") == Decimal("3250.50")
    assert balance_service.total_paid(db, "Max") == Decimal("0")
    assert balance_service.total_paid(db, "Vusi") == Decimal("100")


def test_total_outstanding(db):
    request_id = add_request(db, "1000", date(2024, 1, 5))
    add_payment(db, request_id, "300", date(2024, 2, 4))

    # 1000 * 1.3 - 300
    assert balance_service.total_outstanding(db, "Max") == Decimal("1000.00")


def test_installment_schedule_follows_receivable_date(db):
    request_id = add_request(db, "3000", date(2024, 1, 5))

    # the request-side receivable drives the schedule, not request.request_date
    db.query(Receivable).filter(Receivable.request_id == request_id).update(
        {Receivable.payment_date: date(2024, 1, 15)}
    )
    db.commit()

    [entry] = balance_service.installment_schedule(db, "Max")
    assert entry["request_id"] == request_id
    assert entry["first_installment_date"] == date(2024, 3, 3)
    assert entry["third_installment_date"] == date(2024, 5, 3)
    assert entry["installment_amount"] == Decimal("1300.00")


def test_requests_without_receivable_have_no_schedule(db):
    db.add(
        Request(
            request_date=date(2024, 1, 5),
            member_name="Max",
            amount_request=Decimal("3000"),
            pay_day=5,
            username="Max",
        )
    )
    db.commit()

    assert balance_service.installment_schedule(db, "Max") == []
    assert balance_service.expected_amount(db, "Max", today=date(2024, 2, 15)) == Decimal("0")


def test_arrears_amount(db):
    request_id = add_request(db, "3000", date(2024, 1, 5))
    add_payment(db, request_id, "1000", date(2024, 2, 4))
    add_payment(db, request_id, "1300", date(2024, 3, 4))

    # (1000 - 1300) + (1300 - 1300)
    assert balance_service.arrears_amount(db, "Max") == Decimal("-300.00")


class TestExpectedAmount:
    today = date(2024, 2, 15)  # due window: 2024-03-03 / 2024-03-04

    def test_installment_due_next_month(self, db):
        add_request(db, "3000", date(2024, 1, 5))  # 02-04, 03-04, 04-04
        add_request(db, "1000", date(2024, 1, 20))  # 03-03, 04-03, 05-03

        assert balance_service.expected_amount(db, "Max", today=self.today) == Decimal("1733.33")

    def test_nothing_due(self, db):
        add_request(db, "3000", date(2024, 2, 5))  # 03-04, 04-04, 05-04

        assert balance_service.expected_amount(db, "Max", today=date(2024, 6, 15)) == Decimal("0")

    def test_early_payment_still_expected(self, db):
        request_id = add_request(db, "3000", date(2024, 1, 5))
        add_payment(db, request_id, "1300", date(2024, 2, 2))

        assert balance_service.expected_amount(db, "Max", today=self.today) == Decimal("1300.00")

    def test_paid_this_period_is_not_expected(self, db):
        request_id = add_request(db, "3000", date(2024, 1, 5))
        add_payment(db, request_id, "1300", date(2024, 2, 3))

        assert balance_service.expected_amount(db, "Max", today=self.today) == Decimal("0")

    def test_fully_paid_request_is_excluded(self, db):
        request_id = add_request(db, "3000", date(2023, 12, 5))  # 01-04, 02-04, 03-04
        for paid_on in (date(2023, 12, 20), date(2024, 1, 1), date(2024, 1, 30)):
            add_payment(db, request_id, "1300", paid_on)

        assert balance_service.expected_amount(db, "Max", today=self.today) == Decimal("0")


def test_premium_arrears(db):
    add_premium(db, "3000")
    add_premium(db, "2000")

    # (5000 - 1000) - (4 * 1000 + 1000) * 2
    result = balance_service.premium_arrears(
        db, "Max", today=date(2025, 2, 10), heads={"Max": 4}, baseline=date(2024, 12, 1)
    )
    assert result == Decimal("-6000.00")


def test_premium_arrears_defaults_heads_to_zero(db):
    add_premium(db, "3000", member="Unlisted")

    result = balance_service.premium_arrears(
        db, "Unlisted", today=date(2025, 1, 10), heads={}, baseline=date(2024, 12, 1)
    )
    assert result == Decimal("1000.00")


@pytest.mark.parametrize("amounts, expected", [(["2000"], "1300.00"), (["600", "400"], "0.00")])
def test_guaranteed_split(db, amounts, expected):
    for amount in amounts:
        add_premium(db, amount)

    assert balance_service.guaranteed_split(db, "Max") == Decimal(expected)
