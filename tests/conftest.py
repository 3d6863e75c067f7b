"""
Pytest configuration and fixtures for the booking API tests.
"""

import os

# Must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from booking_app import config
from booking_app.db import engine
from booking_app.main import app
from booking_app import models  # noqa: F401


PASSWORD = "Secret123"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    """bcrypt at production cost makes the suite crawl."""
    monkeypatch.setattr(config, "BCRYPT_ROUNDS", 4)


@pytest.fixture(autouse=True)
def tables():
    """Fresh schema for every test."""
    SQLModel.metadata.create_all(engine)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session():
    with Session(engine) as session:
        yield session


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_client():
    """Build independent clients so several users can hold sessions at once."""
    def _make():
        return TestClient(app)
    return _make


def register(client, name="Alice Smith", email="alice@example.com", password=PASSWORD, role=None):
    body = {"name": name, "email": email, "password": password}
    if role is not None:
        body["role"] = role
    return client.post("/auth/register", json=body)


@pytest.fixture
def customer(make_client):
    c = make_client()
    response = register(c, name="Carla Customer", email="carla@example.com")
    assert response.status_code == 201
    c.user = response.json()["user"]
    return c


@pytest.fixture
def owner(make_client):
    c = make_client()
    response = register(c, name="Otto Owner", email="otto@example.com", role="business-owner")
    assert response.status_code == 201
    c.user = response.json()["user"]
    return c


@pytest.fixture
def business(owner):
    response = owner.post(
        "/business",
        json={"name": "Otto's Cuts", "operating_hours": "09:00-17:00", "category": "barber"},
    )
    assert response.status_code == 201
    return response.json()["business"]
