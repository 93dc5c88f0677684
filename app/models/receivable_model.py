from sqlalchemy import Column, Integer, String, Date, Numeric
from app.utils.database import Base


class Receivable(Base):
    """
    Mirror ledger of money lent vs money repaid.

    One row per request (payment_date / amount_paid / request_id filled) and
    one row per payment (repayment_date / amount_repaid / payment_id filled).
    """

    __tablename__ = "receivable"

    id = Column(Integer, primary_key=True, index=True)

    # request side
    payment_date = Column(Date, nullable=True)
    amount_paid = Column(Numeric(12, 2), nullable=True)

    # payment side
    repayment_date = Column(Date, nullable=True)
    amount_repaid = Column(Numeric(12, 2), nullable=True)

    username = Column(String(100), nullable=False, index=True)

    request_id = Column(Integer, nullable=True, index=True)
    payment_id = Column(Integer, nullable=True, index=True)
