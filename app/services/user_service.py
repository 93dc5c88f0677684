import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from app.core.errors import AuthenticationError, DuplicateKeyError, StorageError
from app.models.user_model import User
from app.schemas.auth_schema import RegisterIn

logger = logging.getLogger(__name__)


def register_user(db: Session, payload: RegisterIn) -> User:
    exists = db.query(User).filter(User.username == payload.username).first()
    if exists:
        raise DuplicateKeyError("Username is already taken")

    user = User(
        username=payload.username.strip(),
        password=generate_password_hash(payload.password),
        email=payload.email.strip(),
        role=payload.role.strip(),
    )

    try:
        db.add(user)
        db.flush()  # unique(username) is enforced here if a concurrent insert won
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Duplicate username on register: %s", payload.username)
        raise DuplicateKeyError("Username is already taken") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error registering user %s: %s", payload.username, e)
        raise StorageError("Error registering user") from e

    db.refresh(user)
    return user


def authenticate(db: Session, username: str, password: str) -> User:
    try:
        user = db.query(User).filter(User.username == username).first()
    except SQLAlchemyError as e:
        logger.error("Error retrieving user %s: %s", username, e)
        raise StorageError("Error retrieving user from database") from e

    # same answer for unknown user and wrong password
    if not user or not check_password_hash(user.password, password):
        raise AuthenticationError("Invalid credentials")

    return user
