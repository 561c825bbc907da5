import pytest

from carelink.core.security import create_access_token


def test_register_login_and_profile(client):
    response = client.post("/api/auth/register", json={
        "email": "david@example.com",
        "name": "David Ong",
        "password": "secret123",
        "confirm_password": "secret123",
    })
    assert response.status_code == 201
    assert response.json()["email"] == "david@example.com"

    response = client.post("/api/auth/register", json={
        "email": "david@example.com",
        "name": "David Ong",
        "password": "secret123",
        "confirm_password": "secret123",
    })
    assert response.status_code == 409

    response = client.post("/api/auth/login", data={"username": "david@example.com", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["name"] == "David Ong"


def test_wrong_password(client):
    client.post("/api/auth/register", json={
        "email": "david@example.com",
        "name": "David Ong",
        "password": "secret123",
        "confirm_password": "secret123",
    })
    response = client.post("/api/auth/login", data={"username": "david@example.com", "password": "wrong-one"})
    assert response.status_code == 401
    assert response.json()["status"] == "error"


def test_protected_route_requires_token(client):
    response = client.get("/api/health-dashboard")
    assert response.status_code == 401
    assert response.json() == {"status": "error", "message": "Not authenticated", "error": "UNAUTHORIZED"}


def test_invalid_token_rejected(client):
    response = client.get("/api/health-dashboard", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_health_checks(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"]["status"] == "connected"

    assert client.get("/api/health").json()["status"] == "healthy"


@pytest.mark.parametrize("sub", ["abc", None])
def test_token_with_non_numeric_subject_rejected(client, sub):
    claims = {"email": "ghost@example.com"}
    if sub is not None:
        claims["sub"] = sub
    token = create_access_token(claims)

    response = client.get("/api/health-dashboard", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json() == {
        "status": "error",
        "message": "Could not validate credentials",
        "error": "UNAUTHORIZED",
    }
