import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

import app.models  # ensure models are registered
from app.core.config import CORS_ORIGINS
from app.core.errors import LedgerError, ValidationError
from app.utils.database import engine, Base

from app.routers import (
    auth_router,
    requests_router,
    payments_router,
    premiums_router,
    receivables_router,
    balances_router,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Member Ledger Backend API", version="1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router.router)
app.include_router(requests_router.router)
app.include_router(payments_router.router)
app.include_router(premiums_router.router)
app.include_router(receivables_router.router)
app.include_router(balances_router.router)


# -------------------------------------------------
# Error mapping
# -------------------------------------------------
@app.exception_handler(LedgerError)
def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    # missing / empty fields are a plain 400, not FastAPI's 422
    err = ValidationError()
    return JSONResponse(
        status_code=err.status_code,
        content={"detail": err.message, "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Unhandled storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Storage error"})


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready (%s)", engine.url.render_as_string(hide_password=True))


@app.get("/")
def root():
    return {"message": "Member Ledger Backend is running!!"}
