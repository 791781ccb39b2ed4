"""Credential store: persistence of user records."""
import logging
import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.errors import ConflictError
from ..models.user import User
from ..schemas.user import normalize_email

logger = logging.getLogger(__name__)


def find_by_email(session: Session, email: str) -> Optional[User]:
    statement = select(User).where(User.email == normalize_email(email))
    return session.exec(statement).first()


def get_by_id(session: Session, user_id: uuid.UUID) -> Optional[User]:
    return session.get(User, user_id)


def create_user(session: Session, email: str, password_hash: str, name: Optional[str] = None) -> User:
    db_user = User(email=normalize_email(email), password_hash=password_hash, name=name)
    session.add(db_user)
    try:
        session.commit()
    except IntegrityError:
        # Another registration took this email between our check and the insert
        session.rollback()
        logger.info("Registration rejected by unique constraint for %s", db_user.email)
        raise ConflictError("Email already registered")
    session.refresh(db_user)
    return db_user
