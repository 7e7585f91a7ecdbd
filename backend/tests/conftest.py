# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import InMemoryDatabase
from app.main import create_app
from app.services.auth_service import AuthStore
from app.services.lead_service import LeadService
from app.services.scoring import LeadScorer


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return AuthStore(bcrypt_rounds=4, clock=clock)


@pytest.fixture
def db(clock):
    return InMemoryDatabase(clock=clock)


@pytest.fixture
def lead_service(db):
    return LeadService(db, LeadScorer(seed=7))


@pytest.fixture
def settings():
    return Settings(
        BCRYPT_ROUNDS=4,
        SEED_DEMO_USERS=False,
        SEED_DEMO_LEADS=False,
        SCORING_SEED=7,
        ENRICHMENT_PROVIDER="demo",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register(client, email="jane@example.com", password="s3cret-pass", name="Jane"):
    return client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
