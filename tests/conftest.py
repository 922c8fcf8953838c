from typing import Generator

import pytest
from fastapi.testclient import TestClient

from wacdo.core.config import Settings
from wacdo.main import create_app

TEST_SECRET = "test-secret-" + "x" * 52
DEFAULT_PASSWORD = "Secret123!"
ADMIN_ROLE_ID = 1


@pytest.fixture
def settings(tmp_path) -> Settings:
    """
    Settings for an isolated application.

    Each test gets its own SQLite file; rate limiting is off unless a test
    turns it on.
    """
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET,
        cors_origins="http://localhost:8000",
        rate_limit_rps=0,
    )


@pytest.fixture
def client(settings) -> Generator[TestClient, None, None]:
    """In-process TestClient; the context manager runs startup (tables, default role)."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Account helpers
# ---------------------------------------------------------------------------

def register_user(
    client: TestClient,
    email: str = "admin@example.com",
    password: str = DEFAULT_PASSWORD,
    roles_id: int = ADMIN_ROLE_ID,
    username: str = "admin",
):
    return client.post(
        "/users",
        json={"username": username, "email": email, "password": password, "roles_id": roles_id},
    )


def login(client: TestClient, email: str = "admin@example.com", password: str = DEFAULT_PASSWORD):
    return client.post("/users/login", json={"email": email, "password": password})


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    """Headers for a freshly registered and logged-in user."""
    resp = register_user(client)
    assert resp.status_code == 201, resp.text
    token = login(client).json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def category(client, auth_headers) -> dict:
    resp = client.post("/categories", json={"name": "Burgers"}, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def product(client, auth_headers, category) -> dict:
    resp = client.post(
        "/products",
        json={"name": "Big Burger", "category_id": category["id"], "price": 5.5, "stock_quantity": 10},
        headers=auth_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
