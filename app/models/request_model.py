# app/models/request_model.py

from sqlalchemy import Column, Integer, String, Date, Numeric, Index
from app.utils.database import Base


class Request(Base):
    __tablename__ = "request"

    __table_args__ = (
        Index("ix_request_username_date", "username", "request_date"),
    )

    id = Column(Integer, primary_key=True, index=True)

    request_date = Column(Date, nullable=False)
    member_name = Column(String(100), nullable=False)
    client_name = Column(String(100), nullable=True)

    amount_request = Column(Numeric(12, 2), nullable=False)
    pay_day = Column(Integer, nullable=False)

    # join key to user.username; not enforced, members need not be registered
    username = Column(String(100), nullable=False, index=True)
