import uuid
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.errors import InvalidTokenError, UnauthenticatedError
from ..core.security import PasswordHasher, TokenService

# auto_error=False so a missing header becomes our 401 body instead of FastAPI's
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_current_user_id(
    token: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> uuid.UUID:
    """
    Resolve the caller from ``Authorization: Bearer <token>``.

    Only the token is checked here; no database lookup happens.
    """
    if token is None or not token.credentials:
        raise UnauthenticatedError("Missing or malformed bearer token")

    try:
        return tokens.verify(token.credentials)
    except InvalidTokenError:
        raise UnauthenticatedError("Invalid or expired token")
