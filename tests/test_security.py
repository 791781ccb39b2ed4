# tests/test_security.py

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from pydantic import ValidationError

from task_tracker.core.config import Settings
from task_tracker.core.errors import InvalidTokenError
from task_tracker.core.security import PasswordHasher, TokenService

SECRET = "unit-test-secret"


@pytest.fixture(scope="module")
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=10)


def test_issued_token_verifies_to_user_id() -> None:
    tokens = TokenService(SECRET, expire_minutes=5)
    user_id = uuid.uuid4()
    assert tokens.verify(tokens.issue(user_id)) == user_id


def test_two_tokens_for_same_user_differ_but_both_verify() -> None:
    tokens = TokenService(SECRET)
    user_id = uuid.uuid4()
    first, second = tokens.issue(user_id), tokens.issue(user_id)
    assert first != second
    assert tokens.verify(first) == tokens.verify(second) == user_id


def test_token_signed_with_other_secret_is_rejected() -> None:
    forged = TokenService("someone-else").issue(uuid.uuid4())
    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify(forged)


def test_tampered_token_is_rejected() -> None:
    tokens = TokenService(SECRET)
    header, payload, signature = tokens.issue(uuid.uuid4()).split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    with pytest.raises(InvalidTokenError):
        tokens.verify(tampered)


def test_expired_token_is_rejected_like_any_other() -> None:
    tokens = TokenService(SECRET, expire_minutes=-1)
    with pytest.raises(InvalidTokenError) as expired:
        tokens.verify(tokens.issue(uuid.uuid4()))
    with pytest.raises(InvalidTokenError) as garbage:
        tokens.verify("not-a-token")
    assert str(expired.value) == str(garbage.value)


@pytest.mark.parametrize(
    "claims",
    [
        {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        {"sub": str(uuid.uuid4())},
        {"sub": "not-a-uuid", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
    ],
)
def test_tokens_with_bad_claims_are_rejected(claims: dict) -> None:
    token = jwt.encode(claims, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify(token)


def test_unsigned_token_is_rejected() -> None:
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        None,
        algorithm="none",
    )
    with pytest.raises(InvalidTokenError):
        TokenService(SECRET).verify(token)


def test_hash_is_salted_and_verifies(hasher: PasswordHasher) -> None:
    first = hasher.hash("secret1")
    second = hasher.hash("secret1")

    assert first != "secret1"
    assert first != second
    assert first.startswith("$2b$10$")
    assert hasher.verify("secret1", first)
    assert hasher.verify("secret1", second)
    assert not hasher.verify("secret2", first)


def test_verify_against_corrupt_hash_is_false(hasher: PasswordHasher) -> None:
    assert hasher.verify("secret1", "not-a-bcrypt-hash") is False


def test_settings_refuse_low_bcrypt_cost() -> None:
    with pytest.raises(ValidationError):
        Settings(BCRYPT_ROUNDS=9)


def test_settings_refuse_default_secret_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(ENVIRONMENT="production")
    assert Settings(ENVIRONMENT="production", SECRET_KEY="real-secret").SECRET_KEY == "real-secret"


def test_settings_are_immutable() -> None:
    settings = Settings(SECRET_KEY="abc")
    with pytest.raises(ValidationError):
        settings.SECRET_KEY = "changed"


def test_settings_default_to_production(monkeypatch) -> None:
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    settings = Settings(SECRET_KEY="real-secret", _env_file=None)
    assert settings.ENVIRONMENT == "production"
    assert not settings.is_development
