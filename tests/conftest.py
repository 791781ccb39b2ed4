# tests/conftest.py

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Dict, Tuple

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# The module-level app in task_tracker.main is built from the environment on import
os.environ.setdefault("ENVIRONMENT", "test")

from task_tracker.core.config import Settings
from task_tracker.main import create_app

API = "/api/v1"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings for one test: a throwaway SQLite file and the cheapest
    bcrypt cost the app accepts.
    """
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret-key",
        BCRYPT_ROUNDS=10,
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture()
def client(app: FastAPI):
    # Context manager runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def register(client: TestClient) -> Callable[..., Tuple[dict, str]]:
    """Register a user and return ``(user, token)``."""

    def _register(email: str = "a@x.com", password: str = "secret1", name: str = None):
        body = {"email": email, "password": password}
        if name is not None:
            body["name"] = name
        response = client.post(f"{API}/auth/register", json=body)
        assert response.status_code == 201, response.text
        data = response.json()
        return data["user"], data["token"]

    return _register


@pytest.fixture()
def alice(register) -> Tuple[dict, Dict[str, str]]:
    user, token = register("alice@example.com", "alice-pass", "Alice")
    return user, auth_headers(token)


@pytest.fixture()
def bob(register) -> Tuple[dict, Dict[str, str]]:
    user, token = register("bob@example.com", "bob-pass", "Bob")
    return user, auth_headers(token)


@pytest.fixture()
def create_task(client: TestClient) -> Callable[..., dict]:
    def _create(headers: Dict[str, str], **body) -> dict:
        body.setdefault("title", "A task")
        response = client.post(f"{API}/tasks", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
