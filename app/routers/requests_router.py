# app/routers/requests_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.utils.database import get_db
from app.models.request_model import Request
from app.schemas import (
    RequestCreate,
    RequestUpdate,
    RequestOut,
    UserRequestOut,
    DeleteIds,
    DeleteResult,
)
from app.services import ledger_service

router = APIRouter(tags=["Requests"])


# CREATE
@router.post("/addRequest")
def add_request(payload: RequestCreate, db: Session = Depends(get_db)):
    request_id = ledger_service.create_request(db, payload)
    return {
        "message": "Add request captured successfully",
        "requestId": request_id,
    }


# UPDATE
@router.put("/updateRequest/{request_id}")
def update_request(request_id: int, payload: RequestUpdate, db: Session = Depends(get_db)):
    ledger_service.update_request(db, request_id, payload)
    return {
        "message": "Request and Receivable updated successfully",
        "updatedId": request_id,
    }


# DELETE (batch)
@router.delete("/deleteRequest", response_model=DeleteResult)
def delete_requests(payload: DeleteIds, db: Session = Depends(get_db)):
    deleted, mirrored = ledger_service.delete_requests(db, payload.ids)
    return DeleteResult(
        message=f"{mirrored} receivables deleted and {deleted} requests deleted successfully",
        deleted=deleted,
        receivables_deleted=mirrored,
        deletedIds=payload.ids,
    )


# READ ALL
@router.get("/getAllRequests")
def get_all_requests(db: Session = Depends(get_db)):
    rows = ledger_service.list_all(db, Request, "requests")
    return {
        "message": "Requests retrieved successfully",
        "requests": [RequestOut.model_validate(r) for r in rows],
    }


# READ BY MEMBER
@router.get("/getUserRequests/{username}")
def get_user_requests(username: str, db: Session = Depends(get_db)):
    rows = ledger_service.user_requests(db, username)
    return {
        "message": "Requests retrieved successfully",
        "requests": [UserRequestOut.model_validate(r) for r in rows],
    }
