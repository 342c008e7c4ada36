from __future__ import annotations

from datetime import datetime, timedelta, timezone

from crud.token_crud import issue_token
from crud.user_crud import get_user_by_email


def test_user_can_register_with_valid_data(client, db):
    payload = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "password": "password123",
        "password_confirmation": "password123",
    }
    resp = client.post("/register", json=payload)

    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert {"id", "first_name", "last_name", "email", "created_at"} <= set(body["user"])
    assert "password_hash" not in body["user"]

    stored = get_user_by_email(db, "ada@example.com")
    assert stored.first_name == "Ada"
    assert stored.password_hash != "password123"


def test_user_cannot_register_with_invalid_data(client):
    resp = client.post("/register", json={"email": "invalid-email", "password": "123"})

    assert resp.status_code == 422
    body = resp.json()
    assert body["message"] == "The given data was invalid."
    assert {"first_name", "last_name", "email", "password"} <= set(body["errors"])


def test_register_requires_matching_confirmation(client):
    resp = client.post(
        "/register",
        json={
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "password": "password123",
            "password_confirmation": "different1",
        },
    )
    assert resp.status_code == 422
    assert "password" in resp.json()["errors"]


def test_register_rejects_taken_email(client, user):
    resp = client.post(
        "/register",
        json={
            "first_name": "Other",
            "last_name": "Person",
            "email": user.email,
            "password": "password123",
            "password_confirmation": "password123",
        },
    )
    assert resp.status_code == 422
    assert resp.json()["errors"]["email"] == ["The email has already been taken."]


def test_user_can_login_with_valid_credentials(client, user):
    resp = client.post("/login", json={"email": user.email, "password": "password123"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["token"]
    assert body["user"]["id"] == user.id

    me = client.get("/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == user.email


def test_user_cannot_login_with_invalid_credentials(client, user):
    resp = client.post("/login", json={"email": user.email, "password": "wrong-password"})

    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}


def test_user_can_logout(client, auth_headers):
    resp = client.post("/logout", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Successfully logged out"}
    assert client.get("/me", headers=auth_headers).status_code == 401


def test_unauthenticated_user_cannot_logout(client):
    resp = client.post("/logout")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthenticated."}


def test_expired_token_is_rejected(client, db, user):
    t = issue_token(db, user.id)
    t.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db.commit()

    resp = client.get("/me", headers={"Authorization": f"Bearer {t.token}"})
    assert resp.status_code == 401


def test_malformed_authorization_header_is_rejected(client):
    assert client.get("/me", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/me", headers={"Authorization": "Bearer nope"}).status_code == 401
