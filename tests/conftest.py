import os

# Settings are read at import time, so configure them before importing eduhub
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DEMO_TICKER_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime, timedelta, timezone
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from eduhub.db.database import Database
from eduhub.main import app
from eduhub.repositories.store import RepositoryStore


class StepClock:
    """Datetime clock that moves one second forward on every read."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


class FakeClock:
    """Epoch-seconds clock advanced by hand."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def db() -> Database:
    return Database(clock=StepClock())


@pytest.fixture
def store(db) -> RepositoryStore:
    return RepositoryStore(db)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client():
    # Entering the client runs the lifespan, so every test gets a fresh store
    with TestClient(app) as test_client:
        yield test_client


def user_payload(email: str, role: str = "student", **extra) -> Dict:
    payload = {
        "email": email,
        "password": "Password123",
        "full_name": f"{role.capitalize()} User",
        "phone": "+251911000000",
        "role": role,
    }
    payload.update(extra)
    return payload


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register a user and return (user, headers)."""
    def _register(email: str, role: str = "student", **extra):
        response = client.post("/api/v1/auth/register", json=user_payload(email, role, **extra))
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], auth_headers(body["access_token"])
    return _register


def make_user_data(email: str, role: str = "student") -> Dict:
    """Store-level user fields (password is an opaque value here)."""
    return {
        "email": email,
        "password": "hashed",
        "full_name": "Test User",
        "phone": "555-0100",
        "role": role,
    }
