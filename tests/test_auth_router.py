import pytest
from fastapi.testclient import TestClient

from shared.core.auth import verify_token
from shared.core.config import settings
from auth_service.app.main import app


@pytest.fixture
def auth_client(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "admin-pass")
    monkeypatch.setattr(settings, "WAREHOUSE_PASSWORD", "warehouse-pass")
    with TestClient(app) as test_client:
        yield test_client


def login(client, username, password):
    return client.post("/api/auth/login", json={"username": username, "password": password})


@pytest.mark.parametrize("username,password,role", [
    ("admin", "admin-pass", "admin"),
    ("warehouse", "warehouse-pass", "warehouse_manager"),
    ("sales_jane", "anything", "sales_rep"),
])
def test_login_issues_token_with_role(auth_client, username, password, role):
    resp = login(auth_client, username, password)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["token_type"] == "bearer"
    assert data["user"] == {"username": username, "role": role}

    claims = verify_token(data["token"])
    assert claims.username == username
    assert claims.role == role
    assert claims.exp is not None


@pytest.mark.parametrize("username,password", [
    ("admin", "wrong"),
    ("warehouse", "admin-pass"),
    ("mallory", "admin-pass"),
])
def test_login_rejects_bad_credentials(auth_client, username, password):
    resp = login(auth_client, username, password)

    assert resp.status_code == 401
    body = resp.json()
    assert body["status"] == "Failure"
    assert body["status_code"] == "200"
    assert body["message"] == "Invalid credentials"


def test_admin_login_disabled_without_configured_password(auth_client, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", None)
    assert login(auth_client, "admin", "").status_code == 422
    assert login(auth_client, "admin", "admin-pass").status_code == 401


def test_blank_password_fails_validation(auth_client):
    resp = login(auth_client, "sales_bob", "   ")
    assert resp.status_code == 422


def test_me_returns_token_identity(auth_client):
    token = login(auth_client, "warehouse", "warehouse-pass").json()["data"]["token"]

    resp = auth_client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 200
    assert resp.json()["data"] == {"username": "warehouse", "role": "warehouse_manager"}


def test_me_requires_token(auth_client):
    assert auth_client.get("/api/auth/me").status_code in (401, 403)


def test_logout(auth_client):
    token = login(auth_client, "sales_amy", "pw").json()["data"]["token"]

    resp = auth_client.post("/api/auth/logout", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 200
    assert resp.json()["message"] == "Logout successful"


def test_auth_health(auth_client):
    resp = auth_client.get("/api/auth/health")
    assert resp.json()["data"] == {"status": "healthy"}


def test_rejected_login_carries_bearer_challenge(auth_client):
    resp = login(auth_client, "admin", "wrong")
    assert resp.headers["www-authenticate"] == "Bearer"
