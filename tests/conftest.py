"""Pytest configuration and shared fixtures.

The environment is set before anything under ``app`` is imported, because
settings are read once at import time.
"""

from __future__ import annotations

import os

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STRIPE_SECRET"] = ""
os.environ["SEED_DEMO_DATA"] = "true"
os.environ["API_PREFIX"] = "/api"

from typing import Iterator  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.security import hash_password  # noqa: E402
from app.db.store import Store  # noqa: E402
from app.models.identity import AuthIdentity  # noqa: E402
from main import create_application  # noqa: E402

PASSWORD = "password"


@pytest.fixture()
def app() -> FastAPI:
    return create_application()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client with the lifespan running, so demo data is seeded."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def store(app: FastAPI, client: TestClient) -> Store:
    """The seeded store behind ``client``."""
    return app.state.store


@pytest.fixture()
def seeded_store() -> Store:
    """A standalone seeded store for service-level tests."""
    s = Store()
    s.seed_if_empty(hash_password(PASSWORD))
    return s


def identity_for(store: Store, email: str) -> AuthIdentity:
    user = store.find_user_by_email(email)
    assert user is not None
    return AuthIdentity(user_id=user.id, tenant_id=user.tenant_id, role=user.role)


def login(client: TestClient, email: str, password: str = PASSWORD) -> str:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def acme_admin(client: TestClient) -> dict[str, str]:
    return bearer(login(client, "admin@acme.test"))


@pytest.fixture()
def acme_member(client: TestClient) -> dict[str, str]:
    return bearer(login(client, "user@acme.test"))


@pytest.fixture()
def globex_admin(client: TestClient) -> dict[str, str]:
    return bearer(login(client, "admin@globex.test"))


@pytest.fixture()
def globex_member(client: TestClient) -> dict[str, str]:
    return bearer(login(client, "user@globex.test"))
