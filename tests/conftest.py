"""
Shared pytest fixtures.

The app reads its settings at import time, so the environment is pointed
at a throwaway SQLite file and a test secret before anything from ``app``
is imported. Tables are dropped and recreated around every test.

Each ``TestClient`` keeps its own cookie jar, so one client stands for one
logged-in user. Use ``make_client`` when a test needs several users.
"""

import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="threadline_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-not-real"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """A separate session for looking at the store directly"""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_client():
    """Factory for independent clients (independent cookie jars)"""
    def _make() -> TestClient:
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


def signup(client: TestClient, username: str, password: str = "secret123", **extra):
    """Sign up through the API; the client keeps the session cookie"""
    payload = {
        "name": extra.pop("name", username.title()),
        "username": username,
        "email": extra.pop("email", f"{username}@example.com"),
        "password": password,
    }
    response = client.post(f"{settings.API_PREFIX}/users/signup", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def alice(client):
    """Client logged in as alice, plus their account data"""
    return client, signup(client, "alice")


@pytest.fixture
def bob(make_client):
    """Separate client logged in as bob, plus their account data"""
    bob_client = make_client()
    return bob_client, signup(bob_client, "bob")


@pytest.fixture
def register():
    """The signup helper, for tests that create accounts on their own clients"""
    return signup
