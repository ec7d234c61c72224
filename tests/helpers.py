# tests/helpers.py

from __future__ import annotations

from fastapi.testclient import TestClient

PASSWORD = "secret123"


def signup(client: TestClient, email: str, password: str = PASSWORD, **extra) -> str:
    """Register an account through the API and return its token."""
    res = client.post("/api/auth/signup", json={"email": email, "password": password, **extra})
    assert res.status_code == 201, res.json()
    return res.json()["data"]["token"]


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def create_task(client: TestClient, headers: dict[str, str], **fields) -> dict:
    body = {"title": "Write report", **fields}
    res = client.post("/api/users/tasks", json=body, headers=headers)
    assert res.status_code == 201, res.json()
    return res.json()["data"]
