from typing import Iterator

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


def normalize_db_url(url: str) -> str:
    """Turn async or Heroku-style URLs into the sync driver form."""
    if not url:
        return "sqlite:///./todo.db"
    url = url.replace("postgres://", "postgresql://", 1)
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    db_url = normalize_db_url(database_url)

    # --- CONFIGURATION FOR SQLITE ---
    if db_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # An in-memory database only lives as long as its one connection
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(db_url, echo=echo, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(db_url, echo=echo, connect_args=connect_args)

    # --- CONFIGURATION FOR POSTGRESQL ---
    return create_engine(
        db_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def create_db_and_tables(engine: Engine) -> None:
    # Table models must be imported so they register on the metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


# Dependency: one session per request, bound to the engine built at startup
def get_session(request: Request) -> Iterator[Session]:
    with Session(request.app.state.engine) as session:
        yield session
