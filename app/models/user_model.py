from sqlalchemy import Column, Integer, String
from app.utils.database import Base


class User(Base):
    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # werkzeug salted hash
    email = Column(String(255), nullable=False)
    role = Column(String(50), nullable=False)
