# app/routers/payments_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.utils.database import get_db
from app.models.payment_model import Payment
from app.schemas import PaymentCreate, PaymentUpdate, PaymentOut, DeleteIds, DeleteResult
from app.services import ledger_service

router = APIRouter(tags=["Payments"])


@router.post("/addPayment")
def add_payment(payload: PaymentCreate, db: Session = Depends(get_db)):
    payment_id = ledger_service.create_payment(db, payload)
    # key kept as requestId for existing front-end clients
    return {
        "message": "Add payment captured successfully",
        "requestId": payment_id,
    }


@router.put("/updatePayment/{payment_id}")
def update_payment(payment_id: int, payload: PaymentUpdate, db: Session = Depends(get_db)):
    ledger_service.update_payment(db, payment_id, payload)
    return {
        "message": "Payment and Receivable updated successfully",
        "updatedId": payment_id,
    }


@router.delete("/deletePayment", response_model=DeleteResult)
def delete_payments(payload: DeleteIds, db: Session = Depends(get_db)):
    deleted, mirrored = ledger_service.delete_payments(db, payload.ids)
    return DeleteResult(
        message=f"{mirrored} receivables deleted and {deleted} payments deleted successfully",
        deleted=deleted,
        receivables_deleted=mirrored,
        deletedIds=payload.ids,
    )


@router.get("/getAllPayments")
def get_all_payments(db: Session = Depends(get_db)):
    rows = ledger_service.list_all(db, Payment, "payments")
    return {
        "message": "Payments retrieved successfully",
        "payments": [PaymentOut.model_validate(r) for r in rows],
    }
