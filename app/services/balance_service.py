"""
Per-member figures derived from the ledger tables.

Nothing here is stored: every call re-reads the rows and recomputes, so the
installment schedule always follows the current receivable payment_date.
All sums over zero rows are 0, never None.
"""
from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core import config
from app.models.payment_model import Payment
from app.models.premium_model import Premium
from app.models.receivable_model import Receivable
from app.models.request_model import Request
from app.utils.ledger_calculations import (
    due_window,
    guaranteed_split as _guaranteed_split,
    installment_amount,
    installments,
    money,
    months_elapsed,
    paid_window_start,
    premium_arrears as _premium_arrears,
)


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def _sum(db: Session, column, *criteria) -> Decimal:
    total = db.query(func.coalesce(func.sum(column), 0)).filter(*criteria).scalar()
    return money(total)


def _premium_totals(db: Session, username: str):
    count, total = (
        db.query(func.count(Premium.id), func.coalesce(func.sum(Premium.amount_paid), 0))
        .filter(Premium.username == username)
        .one()
    )
    return int(count), money(total)


# =================================================
# TOTALS
# =================================================
def total_disbursed(db: Session, username: str) -> Decimal:
    return _sum(db, Request.amount_request, Request.username == username)


def total_paid(db: Session, username: str) -> Decimal:
    return _sum(db, Payment.amount_paid, Payment.username == username)


def total_premiums(db: Session, username: str) -> Decimal:
    return _sum(db, Premium.amount_paid, Premium.username == username)


def atb(db: Session, username: str) -> Decimal:
    """Amount to balance = premiums - disbursed + repaid."""
    return money(
        total_premiums(db, username)
        - total_disbursed(db, username)
        + total_paid(db, username)
    )


def total_outstanding(db: Session, username: str) -> Decimal:
    """
    sum(amount_paid * 1.3 - amount_repaid) over the member's receivable rows,
    nulls counted as 0.
    """
    lent = _sum(db, Receivable.amount_paid, Receivable.username == username)
    repaid = _sum(db, Receivable.amount_repaid, Receivable.username == username)
    return money(lent * config.INTEREST_MULTIPLIER - repaid)


# =================================================
# INSTALLMENTS
# =================================================
def installment_schedule(db: Session, username: str) -> list[dict]:
    """
    One entry per request that has a request-side receivable row, with its
    three due dates and the flat installment amount.
    """
    rows = (
        db.query(Request.id, Request.amount_request, Receivable.payment_date)
        .join(Receivable, Receivable.request_id == Request.id)
        .filter(Request.username == username, Receivable.payment_date.is_not(None))
        .order_by(Request.id.asc(), Receivable.id.asc())
        .all()
    )

    out = []
    seen = set()
    for request_id, amount_request, payment_date in rows:
        if request_id in seen:
            continue
        seen.add(request_id)

        d1, d2, d3 = installments(payment_date)
        out.append(
            {
                "request_id": request_id,
                "payment_date": payment_date,
                "first_installment_date": d1,
                "second_installment_date": d2,
                "third_installment_date": d3,
                "amount_request": money(amount_request),
                "installment_amount": installment_amount(amount_request, config.INTEREST_MULTIPLIER),
            }
        )
    return out


def arrears_amount(db: Session, username: str) -> Decimal:
    """
    For every payment against a scheduled request:
      payment - round(amount_request / 3 * 1.3, 2)
    summed. Negative means the member is behind.
    """
    scheduled = {s["request_id"]: s for s in installment_schedule(db, username)}
    if not scheduled:
        return money(0)

    payments = (
        db.query(Payment.request_id, Payment.amount_paid)
        .filter(Payment.request_id.in_(list(scheduled)))
        .all()
    )

    total = Decimal("0")
    for request_id, amount_paid in payments:
        total += money(amount_paid) - scheduled[request_id]["installment_amount"]
    return money(total)


def expected_amount(db: Session, username: str, today: Optional[date] = None) -> Decimal:
    """
    What the member should pay in the coming period.

    A request counts when one of its installments falls on the 3rd or 4th
    of next month, it has fewer than 3 payments, and none of its payments is
    dated after the 2nd of the current month.
    """
    today = today or date.today()
    window = due_window(today)
    cutoff = paid_window_start(today)

    schedule = installment_schedule(db, username)
    if not schedule:
        return money(0)

    payments = (
        db.query(Payment.request_id, Payment.payment_date)
        .filter(Payment.request_id.in_([s["request_id"] for s in schedule]))
        .all()
    )
    payment_counts = Counter(request_id for request_id, _ in payments)
    paid_this_period = {request_id for request_id, paid_on in payments if paid_on > cutoff}

    total = Decimal("0")
    for s in schedule:
        request_id = s["request_id"]
        if payment_counts[request_id] >= config.INSTALLMENT_COUNT:
            continue
        if request_id in paid_this_period:
            continue

        dates = (
            s["first_installment_date"],
            s["second_installment_date"],
            s["third_installment_date"],
        )
        if any(d in window for d in dates):
            total += s["installment_amount"]

    return money(total)


# =================================================
# PREMIUMS
# =================================================
def premium_arrears(
        db: Session,
        username: str,
        today: Optional[date] = None,
        heads: Optional[dict] = None,
        baseline: Optional[date] = None,
) -> Decimal:
    count, total = _premium_totals(db, username)
    if count == 0:
        return money(0)

    today = today or date.today()
    heads = config.USER_HEADS if heads is None else heads
    baseline = baseline or config.PREMIUM_BASELINE

    return _premium_arrears(
        total,
        heads.get(username, 0),
        months_elapsed(today, baseline),
        config.PREMIUM_JOINING_FEE,
        config.PREMIUM_PER_HEAD,
    )


def guaranteed_split(db: Session, username: str) -> Decimal:
    count, total = _premium_totals(db, username)
    if count == 0:
        return money(0)

    return _guaranteed_split(total, config.PREMIUM_JOINING_FEE, config.INTEREST_MULTIPLIER)
