# tests/helpers.py

from fastapi.testclient import TestClient

DEFAULT_PASSWORD = "correct-horse-battery"


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, name: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Register ``name``@example.com and return the response body plus auth headers."""
    res = client.post(
        "/api/auth/register",
        json={"email": f"{name}@example.com", "username": name, "password": password},
    )
    assert res.status_code == 201, res.text
    body = res.json()
    body["headers"] = bearer(body["token"])
    return body
