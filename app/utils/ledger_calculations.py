from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from app.core.config import INTEREST_MULTIPLIER, INSTALLMENT_COUNT


def money(x) -> Decimal:
    """Always return 2-decimal Decimal with HALF_UP rounding."""
    if x is None:
        x = 0
    if not isinstance(x, Decimal):
        x = Decimal(str(x))
    return x.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def add_months(d: date, months: int) -> date:
    """First day of the month `months` after d's month."""
    idx = d.year * 12 + (d.month - 1) + months
    return date(idx // 12, idx % 12 + 1, 1)


def installments(payment_date: date) -> tuple[date, date, date]:
    """
    Three monthly due dates for a disbursement made on payment_date.

      day <= 10 : 4th of the next 3 months  (month+1 .. month+3, +3 days)
      day  > 10 : 3rd of months +2 .. +4     (+2 days)

    Example:
      2024-01-05 => 2024-02-04, 2024-03-04, 2024-04-04
      2024-01-15 => 2024-03-03, 2024-04-03, 2024-05-03
    """
    if payment_date.day <= 10:
        first_offset, extra_days = 1, 3
    else:
        first_offset, extra_days = 2, 2

    d1, d2, d3 = (
        add_months(payment_date, first_offset + i).replace(day=1 + extra_days)
        for i in range(3)
    )
    return d1, d2, d3


def due_window(today: date) -> tuple[date, date]:
    """Dates an installment must fall on to count as due next period."""
    start = add_months(today, 1)
    return start.replace(day=3), start.replace(day=4)


def paid_window_start(today: date) -> date:
    """Payments dated after this day count as paid for the current month."""
    return today.replace(day=2)


def installment_amount(amount_request, multiplier: Decimal = INTEREST_MULTIPLIER) -> Decimal:
    """
    Flat interest split over the installments:
      round(amount / 3 * 1.3, 2)
    """
    amount = Decimal(str(amount_request))
    return money(amount / INSTALLMENT_COUNT * multiplier)


def months_elapsed(today: date, baseline: date) -> int:
    return (today.year - baseline.year) * 12 + (today.month - baseline.month)


def premium_arrears(
        premium_total,
        heads: int,
        months: int,
        joining_fee: Decimal,
        per_head: Decimal,
) -> Decimal:
    """
    (premiums - joining fee) - (heads * per_head + per_head) * months

    `months` is measured from the configured baseline; before the baseline
    it is negative and the result is inflated accordingly.
    """
    paid = money(premium_total) - joining_fee
    owed = (Decimal(int(heads)) * per_head + per_head) * Decimal(int(months))
    return money(paid - owed)


def guaranteed_split(
        premium_total,
        joining_fee: Decimal,
        multiplier: Decimal = INTEREST_MULTIPLIER,
) -> Decimal:
    return money((money(premium_total) - joining_fee) * multiplier)
