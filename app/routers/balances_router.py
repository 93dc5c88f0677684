# app/routers/balances_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.utils.database import get_db
from app.services import balance_service

router = APIRouter(tags=["Balances"])


@router.get("/getATB/{username}")
def get_atb(username: str, db: Session = Depends(get_db)):
    return {
        "message": "ATB retrieved successfully",
        "atb": float(balance_service.atb(db, username)),
    }


@router.get("/getTotalDisbursed/{username}")
def get_total_disbursed(username: str, db: Session = Depends(get_db)):
    return {
        "message": "Total Requests retrieved successfully",
        "totalRequest": float(balance_service.total_disbursed(db, username)),
    }


@router.get("/getTotalPayments/{username}")
def get_total_payments(username: str, db: Session = Depends(get_db)):
    return {
        "message": "Total Payments retrieved successfully",
        "totalPaid": float(balance_service.total_paid(db, username)),
    }


@router.get("/getTotalOutstanding/{username}")
def get_total_outstanding(username: str, db: Session = Depends(get_db)):
    return {
        "message": "Total Outstanding retrieved successfully",
        "outstanding": float(balance_service.total_outstanding(db, username)),
    }


@router.get("/getArrearsAmount/{username}")
def get_arrears_amount(username: str, db: Session = Depends(get_db)):
    return {
        "message": "Arrears amount retrieved successfully",
        "arrears": float(balance_service.arrears_amount(db, username)),
    }


@router.get("/getPremiumArrearsAmount/{username}")
def get_premium_arrears_amount(username: str, db: Session = Depends(get_db)):
    return {
        "message": "Premium arrears amount retrieved successfully",
        "premiumArrears": float(balance_service.premium_arrears(db, username)),
    }


@router.get("/getExpectedAmount/{username}")
def get_expected_amount(username: str, db: Session = Depends(get_db)):
    return {
        "message": "Expected amount retrieved successfully",
        "expectedAmount": float(balance_service.expected_amount(db, username)),
    }


@router.get("/getGuaranteedSplit/{username}")
def get_guaranteed_split(username: str, db: Session = Depends(get_db)):
    return {
        "message": "Guaranteed split retrieved successfully",
        "guaranteedSplit": float(balance_service.guaranteed_split(db, username)),
    }
