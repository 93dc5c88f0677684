from app.schemas.auth_schema import RegisterIn, LoginIn, LoginOut
from app.schemas.ledger_schema import (
    RequestCreate,
    RequestUpdate,
    RequestOut,
    UserRequestOut,
    PaymentCreate,
    PaymentUpdate,
    PaymentOut,
    ReceivableOut,
    InstallmentDatesOut,
    PremiumCreate,
    PremiumUpdate,
    PremiumOut,
    DeleteIds,
    DeleteResult,
)
