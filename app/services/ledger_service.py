"""
Writes against the ledger tables.

Requests and payments are mirrored into the receivable table, premiums get a
bank_fees row. Each primary write and its mirror run in one transaction: if
the mirror fails, the primary insert/update/delete is rolled back too.
"""
import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import NotFoundError, SecondaryWriteFailure, StorageError, ValidationError
from app.models.payment_model import Payment
from app.models.premium_model import BankFee, Premium
from app.models.receivable_model import Receivable
from app.models.request_model import Request
from app.schemas.ledger_schema import (
    PaymentCreate,
    PaymentUpdate,
    PremiumCreate,
    PremiumUpdate,
    RequestCreate,
    RequestUpdate,
)
from app.utils.ledger_calculations import money

logger = logging.getLogger(__name__)


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def _commit(db: Session, what: str):
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Commit failed while %s: %s", what, e)
        raise StorageError(f"Error {what}") from e


def _dual_insert(db: Session, primary, make_secondary: Callable[[int], object], what: str) -> int:
    try:
        db.add(primary)
        db.flush()  # gives primary.id
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error inserting %s: %s", what, e)
        raise StorageError(f"Error adding {what}") from e

    primary_id = primary.id

    try:
        db.add(make_secondary(primary_id))
        db.flush()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Mirror write for %s %s failed, rolled back: %s", what, primary_id, e)
        raise SecondaryWriteFailure(f"Error adding {what} ledger entry") from e

    _commit(db, f"adding {what}")
    return primary_id


def _get_or_404(db: Session, model, row_id: int, what: str):
    try:
        row = db.query(model).filter(model.id == row_id).first()
    except SQLAlchemyError as e:
        logger.error("Error checking %s %s: %s", what, row_id, e)
        raise StorageError(f"Error checking {what}") from e

    if not row:
        raise NotFoundError(f"{what.capitalize()} not found")
    return row


def _flush(db: Session, what: str):
    try:
        db.flush()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error %s: %s", what, e)
        raise StorageError(f"Error {what}") from e


def _mirror_update(db: Session, fk_column, row_id: int, values: dict, what: str) -> int:
    try:
        matched = (
            db.query(Receivable)
            .filter(fk_column == row_id)
            .update(values, synchronize_session=False)
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error updating receivable for %s %s: %s", what, row_id, e)
        raise SecondaryWriteFailure("Error updating receivable") from e

    if matched == 0:
        logger.info("No receivable row mirrors %s %s; nothing to update", what, row_id)
    return matched


def _require_ids(ids):
    if not ids:
        raise ValidationError("No IDs provided")


def _cascade_delete(db: Session, model, fk_column, ids: list[int], what: str, strict=None):
    _require_ids(ids)
    if strict is None:
        strict = config.STRICT_RECEIVABLE_CASCADE

    try:
        deleted = (
            db.query(model)
            .filter(model.id.in_(ids))
            .delete(synchronize_session=False)
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error deleting %ss %s: %s", what, ids, e)
        raise StorageError(f"Error deleting {what}s") from e

    if deleted == 0:
        db.rollback()
        raise NotFoundError(f"No {what}s found with the given IDs")

    try:
        mirrored = (
            db.query(Receivable)
            .filter(fk_column.in_(ids))
            .delete(synchronize_session=False)
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error deleting receivables for %ss %s: %s", what, ids, e)
        raise SecondaryWriteFailure("Error deleting receivables") from e

    if mirrored == 0:
        if strict:
            db.rollback()
            raise NotFoundError("No receivables found with the given IDs")
        logger.warning("Deleted %d %s(s) %s with no receivable rows to cascade", deleted, what, ids)

    _commit(db, f"deleting {what}s")
    return deleted, mirrored


def list_all(db: Session, model, what: str):
    try:
        rows = db.query(model).order_by(model.id.asc()).all()
    except SQLAlchemyError as e:
        logger.error("Error fetching %s: %s", what, e)
        raise StorageError(f"Error retrieving {what}") from e

    if not rows:
        raise NotFoundError(f"No {what} found")
    return rows


# =================================================
# REQUESTS
# =================================================
def create_request(db: Session, payload: RequestCreate) -> int:
    amount = money(payload.amount)
    req = Request(
        request_date=payload.request_date,
        member_name=payload.member,
        client_name=payload.client,
        amount_request=amount,
        pay_day=payload.payday,
        username=payload.member,
    )
    return _dual_insert(
        db,
        req,
        lambda request_id: Receivable(
            payment_date=payload.request_date,
            amount_paid=amount,
            repayment_date=None,
            amount_repaid=None,
            username=payload.member,
            request_id=request_id,
        ),
        "request",
    )


def update_request(db: Session, request_id: int, payload: RequestUpdate) -> int:
    req = _get_or_404(db, Request, request_id, "request")

    amount = money(payload.amount_request)
    req.request_date = payload.request_date
    req.member_name = payload.member
    req.client_name = payload.client_name
    req.amount_request = amount
    req.pay_day = payload.pay_day
    req.username = payload.member

    _flush(db, "updating request")

    _mirror_update(
        db,
        Receivable.request_id,
        request_id,
        {
            Receivable.payment_date: payload.request_date,
            Receivable.amount_paid: amount,
            Receivable.username: payload.member,
        },
        "request",
    )
    _commit(db, "updating request")
    return request_id


def delete_requests(db: Session, ids: list[int], strict=None):
    return _cascade_delete(db, Request, Receivable.request_id, ids, "request", strict)


def user_requests(db: Session, username: str):
    rows = (
        db.query(Request)
        .filter(Request.username == username)
        .order_by(Request.request_date.asc(), Request.id.asc())
        .all()
    )
    if not rows:
        raise NotFoundError("No requests found")
    return rows


# =================================================
# PAYMENTS
# =================================================
def create_payment(db: Session, payload: PaymentCreate) -> int:
    amount = money(payload.amount)
    pay = Payment(
        payment_date=payload.payment_date,
        member_name=payload.member,
        client_name=payload.client,
        amount_paid=amount,
        request_id=payload.request_id,
        username=payload.member,
    )
    return _dual_insert(
        db,
        pay,
        lambda payment_id: Receivable(
            payment_date=None,
            amount_paid=None,
            repayment_date=payload.payment_date,
            amount_repaid=amount,
            username=payload.member,
            payment_id=payment_id,
        ),
        "payment",
    )


def update_payment(db: Session, payment_id: int, payload: PaymentUpdate) -> int:
    pay = _get_or_404(db, Payment, payment_id, "payment")

    amount = money(payload.amount_paid)
    pay.payment_date = payload.payment_date
    pay.member_name = payload.member
    pay.client_name = payload.client_name
    pay.amount_paid = amount
    pay.request_id = payload.request_id
    pay.username = payload.member

    _flush(db, "updating payment")

    _mirror_update(
        db,
        Receivable.payment_id,
        payment_id,
        {
            Receivable.repayment_date: payload.payment_date,
            Receivable.amount_repaid: amount,
            Receivable.username: payload.member,
        },
        "payment",
    )
    _commit(db, "updating payment")
    return payment_id


def delete_payments(db: Session, ids: list[int], strict=None):
    return _cascade_delete(db, Payment, Receivable.payment_id, ids, "payment", strict)


# =================================================
# PREMIUMS
# =================================================
def create_premium(db: Session, payload: PremiumCreate) -> int:
    prem = Premium(
        payment_date=payload.payment_date,
        amount_paid=money(payload.amount),
        description=payload.description,
        username=payload.member,
    )
    return _dual_insert(
        db,
        prem,
        lambda premium_id: BankFee(
            fee=money(payload.bank_fees),
            payment_date=payload.payment_date,
            premium_id=premium_id,
        ),
        "premium",
    )


def update_premium(db: Session, premium_id: int, payload: PremiumUpdate) -> int:
    prem = _get_or_404(db, Premium, premium_id, "premium")

    prem.payment_date = payload.payment_date
    prem.amount_paid = money(payload.amount)
    prem.description = payload.description
    prem.username = payload.member

    _flush(db, "updating premium")

    if payload.bank_fees is not None:
        try:
            matched = (
                db.query(BankFee)
                .filter(BankFee.premium_id == premium_id)
                .update(
                    {BankFee.fee: money(payload.bank_fees), BankFee.payment_date: payload.payment_date},
                    synchronize_session=False,
                )
            )
            if matched == 0:
                db.add(
                    BankFee(
                        fee=money(payload.bank_fees),
                        payment_date=payload.payment_date,
                        premium_id=premium_id,
                    )
                )
                db.flush()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error updating bank fee for premium %s: %s", premium_id, e)
            raise SecondaryWriteFailure("Error updating bank_fees") from e

    _commit(db, "updating premium")
    return premium_id


def delete_premiums(db: Session, ids: list[int]) -> int:
    _require_ids(ids)

    try:
        db.query(BankFee).filter(BankFee.premium_id.in_(ids)).delete(synchronize_session=False)
        deleted = (
            db.query(Premium)
            .filter(Premium.id.in_(ids))
            .delete(synchronize_session=False)
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error deleting premiums %s: %s", ids, e)
        raise StorageError("Error deleting premiums") from e

    if deleted == 0:
        db.rollback()
        raise NotFoundError("No premiums found to delete")

    _commit(db, "deleting premiums")
    return deleted
