"""
Name: API Test Fixtures

Responsibilities:
  - Provide a TestClient over the real app (in-memory container)
  - Provide a signup helper: register -> read code -> verify -> auth headers
"""

from typing import Callable

import pytest
from fastapi.testclient import TestClient

from albaranes import container
from albaranes.api.main import app

PASSWORD = "supersecret"


@pytest.fixture
def api() -> TestClient:
    return TestClient(app)


def _signup(api: TestClient, email: str, *, role: str = "user") -> dict[str, str]:
    response = api.post(
        "/api/user/register", json={"email": email, "password": PASSWORD, "role": role}
    )
    assert response.status_code == 201, response.text
    headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

    code = container.get_user_repository().get_user_by_email(email).verification_code
    verified = api.put("/api/user/validation", json={"code": code}, headers=headers)
    assert verified.status_code == 200, verified.text
    return headers


@pytest.fixture
def signup(api: TestClient) -> Callable[..., dict[str, str]]:
    def factory(email: str = "owner@example.com", *, role: str = "user") -> dict[str, str]:
        return _signup(api, email, role=role)

    return factory


@pytest.fixture
def auth(signup) -> dict[str, str]:
    return signup()
