from sqlalchemy import Column, Integer, String, Date, Numeric
from app.utils.database import Base


class Payment(Base):
    __tablename__ = "payment"

    id = Column(Integer, primary_key=True, index=True)

    payment_date = Column(Date, nullable=False)
    member_name = Column(String(100), nullable=False)
    client_name = Column(String(100), nullable=True)

    amount_paid = Column(Numeric(12, 2), nullable=False)

    request_id = Column(Integer, nullable=False, index=True)  # request.id, not enforced
    username = Column(String(100), nullable=False, index=True)
