# app/models/premium_model.py
from sqlalchemy import Column, Integer, String, Date, Numeric, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.utils.database import Base


class Premium(Base):
    __tablename__ = "premium"

    id = Column(Integer, primary_key=True, index=True)

    payment_date = Column(Date, nullable=True)
    amount_paid = Column(Numeric(12, 2), nullable=True)
    description = Column(Text, nullable=True)

    username = Column(String(100), nullable=False, index=True)

    bank_fees = relationship("BankFee", back_populates="premium")


class BankFee(Base):
    __tablename__ = "bank_fees"

    id = Column(Integer, primary_key=True, index=True)

    fee = Column(Numeric(12, 2), nullable=False, default=0)
    payment_date = Column(Date, nullable=False)

    premium_id = Column(
        Integer,
        ForeignKey("premium.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    premium = relationship("Premium", back_populates="bank_fees")
