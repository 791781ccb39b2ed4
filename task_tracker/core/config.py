from functools import lru_cache
from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "your-super-secret-key-change-in-production"


class Settings(BaseSettings):
    # Database settings
    DATABASE_URL: str = "sqlite:///./todo.db"
    DB_ECHO: bool = False

    # JWT settings
    SECRET_KEY: str = DEFAULT_SECRET_KEY
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24 * 7, gt=0)

    # Password hashing cost factor
    BCRYPT_ROUNDS: int = Field(default=12, ge=10, le=31)

    # Project settings
    PROJECT_NAME: str = "Task Tracker API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        # Variables in .env that aren't defined here are simply ignored.
        extra="ignore",
        frozen=True,
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @model_validator(mode="after")
    def _refuse_default_secret_in_production(self):
        if self.ENVIRONMENT.lower() == "production" and self.SECRET_KEY == DEFAULT_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set when ENVIRONMENT=production")
        return self


@lru_cache
def get_settings() -> Settings:
    """Settings for the ASGI entry point, read once from the environment."""
    return Settings()
