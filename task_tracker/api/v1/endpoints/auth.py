import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from task_tracker.db.session import get_session
from task_tracker.schemas.user import AuthResponse, UserLogin, UserRead, UserRegister
from task_tracker.core.security import PasswordHasher, TokenService
from task_tracker.services import auth as auth_service
from ...deps import get_current_user_id, get_password_hasher, get_token_service

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_create: UserRegister,
    session: Session = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    user, token = auth_service.register(session, user_create, hasher, tokens)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    user_credentials: UserLogin,
    session: Session = Depends(get_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    user, token = auth_service.login(session, user_credentials, hasher, tokens)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.get("/me", response_model=UserRead)
def get_current_user_profile(
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return auth_service.who_am_i(session, user_id)
