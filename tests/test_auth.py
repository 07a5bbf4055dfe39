"""Tests for login, signup, invite and the bearer-token / role gates."""

from __future__ import annotations

import threading

import pytest
from fastapi.testclient import TestClient

from app.core.security import decode_access_token
from app.db.store import Store
from app.services import auth_service
from app.services.auth_service import AuthService
from conftest import bearer, identity_for, login

SEEDED = [
    ("admin@acme.test", "acme", "admin"),
    ("user@acme.test", "acme", "member"),
    ("admin@globex.test", "globex", "admin"),
    ("user@globex.test", "globex", "member"),
]


class TestLogin:

    @pytest.mark.parametrize("email,slug,role", SEEDED)
    def test_seeded_users_can_log_in(
        self, client: TestClient, store: Store, email: str, slug: str, role: str
    ) -> None:
        response = client.post("/api/auth/login", json={"email": email, "password": "password"})
        assert response.status_code == 200
        data = response.json()

        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 7 * 24 * 3600
        assert data["user"]["email"] == email
        assert data["user"]["role"] == role
        assert data["tenant"] == {"slug": slug, "name": slug.capitalize(), "plan": "free"}

        payload = decode_access_token(data["token"])
        assert payload["tenant_id"] == store.find_tenant_by_slug(slug).id
        assert payload["sub"] == data["user"]["id"]
        assert payload["role"] == role

    def test_email_is_case_insensitive(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "ADMIN@Acme.Test", "password": "password"}
        )
        assert response.status_code == 200

    def test_response_never_exposes_password_hash(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", json={"email": "admin@acme.test", "password": "password"}
        )
        assert "password" not in response.json()["user"]
        assert "$2b$" not in response.text

    @pytest.mark.parametrize(
        "email,password",
        [("admin@acme.test", "wrong"), ("nobody@acme.test", "password")],
    )
    def test_invalid_credentials(self, client: TestClient, email: str, password: str) -> None:
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}

    def test_tenant_slug_must_match_when_given(self, client: TestClient) -> None:
        ok = client.post(
            "/api/auth/login",
            json={"email": "admin@acme.test", "password": "password", "tenantSlug": "ACME"},
        )
        assert ok.status_code == 200

        mismatch = client.post(
            "/api/auth/login",
            json={"email": "admin@acme.test", "password": "password", "tenantSlug": "globex"},
        )
        assert mismatch.status_code == 401
        assert mismatch.json() == {"error": "Invalid credentials"}

    def test_snake_case_tenant_slug_is_checked_too(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@acme.test", "password": "password", "tenant_slug": "globex"},
        )
        assert response.status_code == 401

    def test_missing_fields_is_validation_error(self, client: TestClient) -> None:
        response = client.post("/api/auth/login", json={"email": "admin@acme.test"})
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid request body"


class TestSignup:

    def test_signup_then_login(self, client: TestClient, store: Store) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"email": "new@acme.test", "password": "pw", "tenantSlug": "acme"},
        )
        assert response.status_code == 201
        signup = response.json()
        assert signup["user"]["role"] == "member"
        assert signup["tenant"]["slug"] == "acme"

        token = login(client, "new@acme.test", "pw")
        payload = decode_access_token(token)
        assert payload["tenant_id"] == store.find_tenant_by_slug("acme").id
        assert payload["role"] == "member"
        assert payload["sub"] == signup["user"]["id"]

    def test_unknown_tenant(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"email": "new@initech.test", "password": "pw", "tenantSlug": "initech"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid tenant"}

    def test_email_unique_across_tenants(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"email": "USER@globex.test", "password": "pw", "tenantSlug": "acme"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Email already exists"}

    def test_tenant_slug_is_case_insensitive(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"email": "caps@acme.test", "password": "pw", "tenantSlug": "Acme"},
        )
        assert response.status_code == 201
        assert response.json()["tenant"]["slug"] == "acme"

    def test_snake_case_tenant_slug_is_accepted(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup",
            json={"email": "snake@acme.test", "password": "pw", "tenant_slug": "acme"},
        )
        assert response.status_code == 201
        assert response.json()["tenant"]["slug"] == "acme"

    def test_missing_tenant_slug_is_validation_error(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/signup", json={"email": "new@acme.test", "password": "pw"}
        )
        assert response.status_code == 422


class TestInvite:

    def test_admin_invites_member_by_default(
        self, client: TestClient, acme_admin: dict
    ) -> None:
        response = client.post(
            "/api/tenants/acme/invite", json={"email": "colleague@acme.test"}, headers=acme_admin
        )
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "User invited"
        assert data["user"]["role"] == "member"
        assert "token" not in data

        # Invited users log in with the default password
        token = login(client, "colleague@acme.test", "password")
        assert decode_access_token(token)["role"] == "member"

    def test_admin_can_invite_admin(self, client: TestClient, acme_admin: dict) -> None:
        response = client.post(
            "/api/tenants/acme/invite",
            json={"email": "boss@acme.test", "role": "admin"},
            headers=acme_admin,
        )
        assert response.status_code == 201
        assert response.json()["user"]["role"] == "admin"

    def test_invite_lands_in_callers_tenant(
        self, client: TestClient, store: Store, acme_admin: dict
    ) -> None:
        response = client.post(
            "/api/tenants/globex/invite", json={"email": "spy@acme.test"}, headers=acme_admin
        )
        assert response.status_code == 201
        user = store.find_user_by_email("spy@acme.test")
        assert user.tenant_id == store.find_tenant_by_slug("acme").id

    def test_duplicate_email(self, client: TestClient, acme_admin: dict) -> None:
        response = client.post(
            "/api/tenants/acme/invite", json={"email": "admin@globex.test"}, headers=acme_admin
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Email already exists"}

    def test_member_cannot_invite(self, client: TestClient, acme_member: dict) -> None:
        response = client.post(
            "/api/tenants/acme/invite", json={"email": "x@acme.test"}, headers=acme_member
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Admin role required"}

    def test_invite_requires_auth(self, client: TestClient) -> None:
        response = client.post("/api/tenants/acme/invite", json={"email": "x@acme.test"})
        assert response.status_code == 401
        assert response.json() == {"error": "Missing Authorization header"}


class TestBearerGate:

    def test_missing_header(self, client: TestClient) -> None:
        response = client.get("/api/notes")
        assert response.status_code == 401
        assert response.json() == {"error": "Missing Authorization header"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_malformed_header(self, client: TestClient) -> None:
        response = client.get("/api/notes", headers={"Authorization": "Token abc"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid Authorization header"}

    def test_invalid_token(self, client: TestClient) -> None:
        response = client.get("/api/notes", headers=bearer("not-a-jwt"))
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}


class TestAuthService:

    @staticmethod
    def lock_is_free(store: Store) -> bool:
        result = []

        def try_acquire() -> None:
            acquired = store.lock.acquire(blocking=False)
            if acquired:
                store.lock.release()
            result.append(acquired)

        worker = threading.Thread(target=try_acquire)
        worker.start()
        worker.join()
        return result[0]

    def test_passwords_are_hashed_outside_the_store_lock(
        self, seeded_store: Store, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen = []

        def fake_hash(password: str) -> str:
            seen.append(self.lock_is_free(seeded_store))
            return f"hashed:{password}"

        monkeypatch.setattr(auth_service, "hash_password", fake_hash)

        AuthService.signup(seeded_store, "new@acme.test", "pw", "acme")
        AuthService.invite(
            seeded_store,
            "invitee@acme.test",
            None,
            identity_for(seeded_store, "admin@acme.test"),
        )

        assert seen == [True, True]
        assert seeded_store.find_user_by_email("new@acme.test").password_hash == "hashed:pw"
