import re
import uuid
from typing import Optional

from pydantic import Field, field_validator

from .base import APIModel, UTCDateTime

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
MIN_PASSWORD_LENGTH = 6


def normalize_email(value: str) -> str:
    return value.strip().lower()


def _check_email(value: str) -> str:
    value = normalize_email(value)
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address")
    return value


class UserRegister(APIModel):
    email: str = Field(max_length=255)
    password: str
    name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return value


class UserLogin(APIModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class UserRead(APIModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    created_at: UTCDateTime
    updated_at: UTCDateTime


class AuthResponse(APIModel):
    user: UserRead
    token: str
