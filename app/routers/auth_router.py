from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.utils.database import get_db
from app.schemas import RegisterIn, LoginIn, LoginOut
from app.services import user_service

router = APIRouter(tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    user_service.register_user(db, payload)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = user_service.authenticate(db, payload.username, payload.password)
    return LoginOut(userId=user.id, role=user.role)
