import uuid
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from .config import Settings
from .errors import InvalidTokenError


class PasswordHasher:
    """bcrypt hashing with a per-hash random salt and configurable cost."""

    def __init__(self, rounds: int = 12):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(rounds=settings.BCRYPT_ROUNDS)

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Unrecognized or corrupt stored hash
            return False


class TokenService:
    """
    Issues and verifies signed, time-limited access tokens.

    Tokens are stateless JWTs whose ``sub`` claim is the user id. There is
    no revocation list, so logging out is up to the client.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 30):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(self, user_id: uuid.UUID) -> str:
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.expires_delta,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> uuid.UUID:
        # Expired, forged and malformed tokens all end up as the same error
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
            return uuid.UUID(payload["sub"])
        except (jwt.exceptions.PyJWTError, ValueError, TypeError, AttributeError) as exc:
            raise InvalidTokenError("Invalid token") from exc
