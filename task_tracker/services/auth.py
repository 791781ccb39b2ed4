"""Registration, login and "who am I"."""
import logging
import uuid
from typing import Tuple

from sqlmodel import Session

from ..core.errors import ConflictError, InvalidCredentialsError, NotFoundError
from ..core.security import PasswordHasher, TokenService
from ..models.user import User
from ..schemas.user import UserLogin, UserRegister
from . import users

logger = logging.getLogger(__name__)


def register(
    session: Session,
    data: UserRegister,
    hasher: PasswordHasher,
    tokens: TokenService,
) -> Tuple[User, str]:
    # Fast path; the unique constraint in create_user is the real guard
    if users.find_by_email(session, data.email):
        raise ConflictError("Email already registered")

    user = users.create_user(
        session,
        email=data.email,
        password_hash=hasher.hash(data.password),
        name=data.name,
    )
    logger.info("Registered user %s", user.id)
    return user, tokens.issue(user.id)


def login(
    session: Session,
    data: UserLogin,
    hasher: PasswordHasher,
    tokens: TokenService,
) -> Tuple[User, str]:
    user = users.find_by_email(session, data.email)

    # Unknown email and wrong password must look identical to the caller
    if user is None or not hasher.verify(data.password, user.password_hash):
        logger.info("Failed login attempt for %s", data.email)
        raise InvalidCredentialsError()

    logger.debug("User %s logged in", user.id)
    return user, tokens.issue(user.id)


def who_am_i(session: Session, user_id: uuid.UUID) -> User:
    user = users.get_by_id(session, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
