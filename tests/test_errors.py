# tests/test_errors.py

from __future__ import annotations

from fastapi.testclient import TestClient

from task_tracker.core.config import Settings
from task_tracker.main import create_app

from .conftest import API


def _app_with_failing_route(settings: Settings):
    app = create_app(settings)

    @app.get("/boom")
    def boom():
        raise RuntimeError("database exploded")

    return app


def test_unhandled_error_is_hidden_outside_development(settings) -> None:
    with TestClient(_app_with_failing_route(settings)) as client:
        response = client.get("/boom")
        # The process keeps serving after the failure
        health = client.get("/health")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert health.status_code == 200


def test_unhandled_error_detail_in_development(settings) -> None:
    dev_settings = settings.model_copy(update={"ENVIRONMENT": "development"})
    with TestClient(_app_with_failing_route(dev_settings)) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "message": "database exploded"}


def test_malformed_json_is_a_bad_request(client, alice) -> None:
    _, headers = alice
    response = client.post(
        f"{API}/tasks",
        content=b"{not json",
        headers={**headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_malformed_task_id_is_a_bad_request(client, alice) -> None:
    _, headers = alice
    response = client.get(f"{API}/tasks/123", headers=headers)
    assert response.status_code == 400
    assert response.json()["error"].startswith("task_id: ")


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_unhandled_error_is_hidden_in_production(settings) -> None:
    prod_settings = settings.model_copy(update={"ENVIRONMENT": "production"})
    with TestClient(_app_with_failing_route(prod_settings)) as client:
        response = client.get("/boom")

    assert response.json() == {"error": "Internal server error"}


def test_health_timestamp_is_utc(client) -> None:
    assert client.get("/health").json()["timestamp"].endswith("Z")
