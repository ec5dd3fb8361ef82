# tests/conftest.py

import os

# Configure the package before it is imported: one shared in-memory database
# and a fixed signing secret.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-signing-secret"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

import mission_control.models  # noqa: F401
from mission_control.db.config import engine
from mission_control.db.init import promote_admin
from mission_control.main import app

from .helpers import register


@pytest.fixture(autouse=True)
def fresh_schema():
    """Every test starts from empty tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture()
def session():
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def operator(client: TestClient) -> dict:
    return register(client, "operator")


@pytest.fixture()
def admin(client: TestClient) -> dict:
    body = register(client, "root")
    assert promote_admin("root@example.com")
    return body
