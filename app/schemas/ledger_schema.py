from pydantic import BaseModel, Field, field_validator
from datetime import date
from decimal import Decimal
from typing import Optional, List


def _blank_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


# ----------------------------
# Requests
# ----------------------------
class RequestCreate(BaseModel):
    request_date: date
    member: str = Field(..., min_length=1)
    client: Optional[str] = None
    amount: Decimal = Field(gt=0)
    payday: int = Field(gt=0)

    @field_validator("client", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class RequestUpdate(BaseModel):
    request_date: date
    member: str = Field(..., min_length=1)
    client_name: Optional[str] = None
    amount_request: Decimal = Field(gt=0)
    pay_day: int = Field(gt=0)

    @field_validator("client_name", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class RequestOut(BaseModel):
    id: int
    request_date: date
    member_name: str
    client_name: Optional[str] = None
    amount_request: float
    pay_day: int
    username: str

    class Config:
        from_attributes = True


class UserRequestOut(BaseModel):
    request_date: date
    amount_request: float
    id: int

    class Config:
        from_attributes = True


# ----------------------------
# Payments
# ----------------------------
class PaymentCreate(BaseModel):
    payment_date: date
    member: str = Field(..., min_length=1)
    client: Optional[str] = None
    amount: Decimal = Field(gt=0)
    request_id: int = Field(gt=0)

    @field_validator("client", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class PaymentUpdate(BaseModel):
    payment_date: date
    member: str = Field(..., min_length=1)
    client_name: Optional[str] = None
    amount_paid: Decimal = Field(gt=0)
    request_id: int = Field(gt=0)

    @field_validator("client_name", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class PaymentOut(BaseModel):
    id: int
    payment_date: date
    member_name: str
    client_name: Optional[str] = None
    amount_paid: float
    request_id: int
    username: str

    class Config:
        from_attributes = True


# ----------------------------
# Receivables
# ----------------------------
class ReceivableOut(BaseModel):
    id: int
    payment_date: Optional[date] = None
    amount_paid: Optional[float] = None
    repayment_date: Optional[date] = None
    amount_repaid: Optional[float] = None
    username: str
    request_id: Optional[int] = None
    payment_id: Optional[int] = None

    class Config:
        from_attributes = True


class InstallmentDatesOut(BaseModel):
    request_id: int
    payment_date: date
    first_installment_date: date
    second_installment_date: date
    third_installment_date: date
    installment_amount: float


# ----------------------------
# Premiums
# ----------------------------
class PremiumCreate(BaseModel):
    payment_date: date
    member: str = Field(..., min_length=1)
    amount: Decimal = Field(gt=0)
    bank_fees: Decimal = Field(default=Decimal("0"), ge=0)
    description: Optional[str] = None

    @field_validator("description", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class PremiumUpdate(BaseModel):
    payment_date: date
    member: str = Field(..., min_length=1)
    amount: Decimal = Field(gt=0)
    description: Optional[str] = None
    bank_fees: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("description", mode="before")
    def empty_to_none(cls, v):
        return _blank_to_none(v)


class PremiumOut(BaseModel):
    id: int
    payment_date: Optional[date] = None
    amount_paid: Optional[float] = None
    description: Optional[str] = None
    username: str

    class Config:
        from_attributes = True


# ----------------------------
# Batch delete
# ----------------------------
class DeleteIds(BaseModel):
    ids: List[int] = Field(..., min_length=1)


class DeleteResult(BaseModel):
    message: str
    deleted: int
    receivables_deleted: int = 0
    deletedIds: List[int]
