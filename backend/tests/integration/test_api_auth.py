"""Integration tests for authentication endpoints and bearer-token checks."""

from __future__ import annotations

from freezegun import freeze_time
from tests.factories.staff import DEFAULT_PASSWORD
from travelcrm.infra.jwt.flask_jwt_token_provider import JWTTokenProvider

REGISTER_PAYLOAD = {
    "name": "Rina Putri",
    "username": "rina",
    "email": "rina@example.com",
    "password": "secret123",
}


def test_register_and_login(client) -> None:
    """A staff member can register then obtain a JWT by logging in."""

    resp = client.post("/auth/register", json=REGISTER_PAYLOAD)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["code"] == 200
    assert body["message"] == "User registered successfully."
    assert body["data"] == {"username": "rina", "name": "Rina Putri", "email": "rina@example.com"}

    resp = client.post("/auth/login", json={"username": "rina", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["message"] == "User logged in successfully."
    assert set(body["data"]) == {"id", "username", "email", "role", "token"}
    assert body["data"]["role"] == "STAFF"

    token = body["data"]["token"]
    resp = client.get("/customers", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


def test_register_duplicate_username(client, staff) -> None:
    payload = dict(REGISTER_PAYLOAD, username=staff.username)

    resp = client.post("/auth/register", json=payload)

    assert resp.status_code == 409
    assert resp.get_json()["error"] == "conflict"


def test_register_validation_errors(client) -> None:
    resp = client.post("/auth/register", json={"username": "x"})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "validation_error"
    assert {"name", "email", "password"} <= set(body["errors"])


def test_login_unknown_user(client) -> None:
    resp = client.post("/auth/login", json={"username": "ghost", "password": DEFAULT_PASSWORD})

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "User not found"


def test_login_wrong_password(client, staff) -> None:
    resp = client.post("/auth/login", json={"username": staff.username, "password": "wrong-pass"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid password"


def test_protected_route_requires_token(client) -> None:
    resp = client.get("/customers")

    assert resp.status_code == 401
    body = resp.get_json()
    assert body["code"] == 401
    assert body["data"] is None


def test_protected_route_rejects_garbage_token(client) -> None:
    resp = client.get("/destinations", headers={"Authorization": "Bearer not-a-token"})

    assert resp.status_code == 401


def test_protected_route_rejects_expired_token(client, staff) -> None:
    with freeze_time("2020-01-01 00:00:00"):
        token = JWTTokenProvider().issue(
            {"id": staff.id, "username": staff.username, "email": staff.email, "role": "STAFF"}
        )

    resp = client.get("/customers", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401


def test_register_with_shortest_password_then_login(client) -> None:
    """Any password accepted at registration is accepted at login."""

    payload = dict(REGISTER_PAYLOAD, username="dewi", email="dewi@example.com", password="dewi12")
    assert client.post("/auth/register", json=payload).status_code == 200

    resp = client.post("/auth/login", json={"username": "dewi", "password": "dewi12"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["username"] == "dewi"


def test_login_rejects_password_shorter_than_registration_minimum(client, staff) -> None:
    resp = client.post("/auth/login", json={"username": staff.username, "password": "abc"})

    assert resp.status_code == 400
    assert "password" in resp.get_json()["errors"]
