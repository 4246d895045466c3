"""
Shared pytest fixtures: an in-memory database, a TestClient and user helpers.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.db.base import Base
from app.db.session import get_db
from app.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

API = "/api/v1"


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_user(client, email, password="secret123", first_name=None):
    """Register a user and return (user dict, auth headers, token payload)."""
    body = {"email": email, "password": password}
    if first_name:
        body["first_name"] = first_name
    response = client.post(f"{API}/auth/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    headers = {"Authorization": f"Bearer {data['access_token']}"}
    return data["user"], headers, data


def create_trip(client, headers, **overrides):
    body = {
        "title": "Lisbon long weekend",
        "destination": "Lisbon",
        "start_date": "2026-05-01",
        "end_date": "2026-05-04",
        "budget": 1500,
        "currency": "eur",
    }
    body.update(overrides)
    response = client.post(f"{API}/trips", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["trip"]


def add_member(client, headers, trip_id, email, role="MEMBER"):
    return client.post(
        f"{API}/trips/{trip_id}/members",
        json={"email": email, "role": role},
        headers=headers,
    )


@pytest.fixture
def users(client):
    """Three registered users: the first one plans trips."""
    u1, h1, _ = register_user(client, "ana@example.com", first_name="Ana")
    u2, h2, _ = register_user(client, "ben@example.com", first_name="Ben")
    u3, h3, _ = register_user(client, "cleo@example.com", first_name="Cleo")
    return [(u1, h1), (u2, h2), (u3, h3)]


@pytest.fixture
def trip_with_members(client, users):
    """A trip owned by the first user with the other two invited."""
    (u1, h1), (u2, h2), (u3, h3) = users
    trip = create_trip(client, h1)
    assert add_member(client, h1, trip["id"], u2["email"]).status_code == 200
    assert add_member(client, h1, trip["id"], u3["email"]).status_code == 200
    return trip
