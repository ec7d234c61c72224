# tests/test_auth_api.py

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.core.config import Settings
from app.core.security import Authenticator, get_authenticator
from app.main import app
from app.models.user import DEFAULT_AVATAR_URL, User

from .helpers import PASSWORD, auth, signup


def test_health_probe(client: TestClient) -> None:
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["success"] is True


def test_signup_stores_normalized_email_and_hash(client: TestClient, session: Session) -> None:
    res = client.post(
        "/api/auth/signup",
        json={"email": "  Alice.Smith@Example.COM ", "password": PASSWORD},
    )

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"
    assert body["data"]["token"]

    user = session.exec(select(User)).one()
    assert user.email == "alice.smith@example.com"
    assert user.password_hash != PASSWORD
    assert user.password_hash.startswith("$2")
    assert user.name == "alice.smith"
    assert user.bio == ""
    assert user.avatar == DEFAULT_AVATAR_URL


def test_signup_uses_supplied_name(client: TestClient) -> None:
    token = signup(client, "carol@example.com", name="Carol Danvers")
    me = client.get("/api/auth/me", headers=auth(token)).json()["data"]
    assert me["name"] == "Carol Danvers"


def test_signup_duplicate_email_is_rejected(client: TestClient) -> None:
    signup(client, "dave@example.com")

    res = client.post(
        "/api/auth/signup", json={"email": "DAVE@example.com", "password": PASSWORD}
    )

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "User already exists"}


def test_signup_validation_error_names_field(client: TestClient) -> None:
    res = client.post("/api/auth/signup", json={"email": "erin@example.com", "password": "123"})

    assert res.status_code == 400
    assert res.json()["success"] is False
    assert "Password" in res.json()["message"]


def test_login_token_maps_back_to_user(client: TestClient, session: Session) -> None:
    signup(client, "frank@example.com")

    res = client.post(
        "/api/auth/login", json={"email": " Frank@Example.com", "password": PASSWORD}
    )

    assert res.status_code == 200
    token = res.json()["data"]["token"]
    user = session.exec(select(User).where(User.email == "frank@example.com")).one()
    assert get_authenticator().decode_access_token(token) == user.id


def test_login_failures_are_indistinguishable(client: TestClient) -> None:
    signup(client, "grace@example.com")

    wrong_password = client.post(
        "/api/auth/login", json={"email": "grace@example.com", "password": "wrong-pass"}
    )
    unknown_email = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Invalid Credentials"


def test_me_excludes_password(client: TestClient, alice: dict[str, str]) -> None:
    res = client.get("/api/auth/me", headers=alice)

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["email"] == "alice@example.com"
    assert "createdAt" in data and "updatedAt" in data
    assert not any("password" in key.lower() for key in data)


def test_me_requires_bearer_header(client: TestClient) -> None:
    missing = client.get("/api/auth/me")
    wrong_scheme = client.get("/api/auth/me", headers={"Authorization": "Token abc"})

    for res in (missing, wrong_scheme):
        assert res.status_code == 401
        assert res.json() == {"success": False, "message": "No token, authorization denied"}


def test_me_rejects_invalid_token(client: TestClient) -> None:
    res = client.get("/api/auth/me", headers=auth("not.a.token"))

    assert res.status_code == 401
    assert res.json()["message"] == "Token is not valid"


def test_me_for_unknown_user_is_not_found(client: TestClient) -> None:
    token = get_authenticator().create_access_token(uuid.uuid4())

    res = client.get("/api/auth/me", headers=auth(token))

    assert res.status_code == 404
    assert res.json()["message"] == "User not found"


def test_non_object_body_is_a_client_error(client: TestClient) -> None:
    res = client.post("/api/auth/login", json=["alice@example.com", PASSWORD])

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Invalid request body"}


def test_token_signing_failure_is_generic_server_error(engine) -> None:
    from app.database import get_session

    broken = Authenticator(Settings(JWT_SECRET="x", JWT_ALG="NOPE256", BCRYPT_ROUNDS=4))

    def _get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override
    app.dependency_overrides[get_authenticator] = lambda: broken
    try:
        client = TestClient(app, raise_server_exceptions=False)
        res = client.post(
            "/api/auth/signup", json={"email": "henry@example.com", "password": PASSWORD}
        )
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Server Error"}


def test_signup_short_email_name_requires_explicit_name(client: TestClient) -> None:
    res = client.post("/api/auth/signup", json={"email": "ab@example.com", "password": PASSWORD})

    assert res.status_code == 400
    assert res.json()["success"] is False
    assert '"Name"' in res.json()["message"]
    login = client.post("/api/auth/login", json={"email": "ab@example.com", "password": PASSWORD})
    assert login.status_code == 401

    token = signup(client, "ab@example.com", name="Abby")
    me = client.get("/api/auth/me", headers=auth(token)).json()["data"]
    assert me["name"] == "Abby"


def test_signup_default_name_is_truncated_to_fifty(client: TestClient) -> None:
    token = signup(client, f"{'n' * 60}@example.com")

    name = client.get("/api/auth/me", headers=auth(token)).json()["data"]["name"]

    assert name == "n" * 50


def test_responses_carry_security_headers(client: TestClient) -> None:
    ok = client.get("/")
    denied = client.get("/api/auth/me")

    for res in (ok, denied):
        assert res.headers["X-Content-Type-Options"] == "nosniff"
        assert res.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert res.headers["Referrer-Policy"] == "no-referrer"
