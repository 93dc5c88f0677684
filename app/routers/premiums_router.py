# app/routers/premiums_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.utils.database import get_db
from app.models.premium_model import Premium
from app.schemas import PremiumCreate, PremiumUpdate, PremiumOut, DeleteIds, DeleteResult
from app.services import ledger_service

router = APIRouter(tags=["Premiums"])


@router.post("/addPremium")
def add_premium(payload: PremiumCreate, db: Session = Depends(get_db)):
    premium_id = ledger_service.create_premium(db, payload)
    return {
        "message": "Add premium captured successfully",
        "requestId": premium_id,
    }


@router.put("/updatePremium/{premium_id}")
def update_premium(premium_id: int, payload: PremiumUpdate, db: Session = Depends(get_db)):
    ledger_service.update_premium(db, premium_id, payload)
    return {
        "message": "Premium updated successfully",
        "updatedId": premium_id,
    }


@router.delete("/deletePremium", response_model=DeleteResult)
def delete_premiums(payload: DeleteIds, db: Session = Depends(get_db)):
    deleted = ledger_service.delete_premiums(db, payload.ids)
    return DeleteResult(
        message=f"{deleted} premium(s) deleted successfully",
        deleted=deleted,
        deletedIds=payload.ids,
    )


@router.get("/getAllPremiums")
def get_all_premiums(db: Session = Depends(get_db)):
    rows = ledger_service.list_all(db, Premium, "premiums")
    return {
        "message": "Premiums retrieved successfully",
        "premiums": [PremiumOut.model_validate(r) for r in rows],
    }
