# Automatically load all models so metadata knows them
from app.models.user_model import User
from app.models.request_model import Request
from app.models.payment_model import Payment
from app.models.receivable_model import Receivable
from app.models.premium_model import Premium, BankFee
