from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.utils.database import get_db
from app.models.receivable_model import Receivable
from app.schemas import ReceivableOut, InstallmentDatesOut
from app.services import ledger_service, balance_service

router = APIRouter(tags=["Receivables"])


@router.get("/getAllReceivables")
def get_all_receivables(db: Session = Depends(get_db)):
    rows = ledger_service.list_all(db, Receivable, "receivables")
    return {
        "message": "Receivables retrieved successfully",
        "receivables": [ReceivableOut.model_validate(r) for r in rows],
    }


@router.get("/getInstallmentDates/{username}")
def get_installment_dates(username: str, db: Session = Depends(get_db)):
    schedule = balance_service.installment_schedule(db, username)
    return {
        "message": "Installment dates retrieved successfully",
        "installments": [
            InstallmentDatesOut(
                request_id=s["request_id"],
                payment_date=s["payment_date"],
                first_installment_date=s["first_installment_date"],
                second_installment_date=s["second_installment_date"],
                third_installment_date=s["third_installment_date"],
                installment_amount=float(s["installment_amount"]),
            )
            for s in schedule
        ],
    }
