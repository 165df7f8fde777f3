"""Shared fixtures: a fresh app over an in-memory SQLite store per test."""

import pytest
from fastapi.testclient import TestClient

from blog_api.main import create_app
from blog_api.utils.config import Settings

USER_DATA = {
    "name": "John Doe",
    "email": "john@nest.test",
    "password": "Secret_123",
}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret-key",
        bcrypt_rounds=4,
        enable_test_routes=True,
        log_level="DEBUG",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user_data() -> dict:
    return dict(USER_DATA)


@pytest.fixture
def registered_user(client, user_data) -> dict:
    response = client.post("/auth/register", json=user_data)
    assert response.status_code == 201
    return response.json()["data"]


@pytest.fixture
def token(client, registered_user, user_data) -> str:
    response = client.post(
        "/auth/login",
        json={"email": user_data["email"], "password": user_data["password"]},
    )
    assert response.status_code == 200
    return response.json()["data"]["access_token"]


@pytest.fixture
def auth_headers(token) -> dict:
    return {"Authorization": f"Bearer {token}"}


def assert_bad_request(response, messages):
    """Every expected message is present in a 400 envelope."""
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Bad Request"
    for message in messages:
        assert message in body["message"]


def assert_unauthorized(response):
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Unauthorized"
