"""
Pytest configuration

Points the app at an in-memory SQLite database before anything imports it.
"""

import os

os.environ["FILECLOUD_DATABASE_URL"] = "sqlite://"
os.environ["FILECLOUD_SEED_USERS"] = '{"testuser": "password"}'
os.environ["FILECLOUD_LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from filecloud.main import app
from filecloud.models import Base
from filecloud.models.database import SessionLocal, engine
from filecloud.seed import seed_users

SEED_USERS = {"testuser": "password", "other": "secret"}


@pytest.fixture
def db():
    """Fresh schema with seeded users"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    seed_users(session, SEED_USERS)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Log a seeded user in and return the auth-token"""

    def _login(user="testuser", password="password"):
        response = client.post("/login", json={"login": user, "password": password})
        assert response.status_code == 200
        return response.json()["auth-token"]

    return _login


@pytest.fixture
def token(login):
    return login()


@pytest.fixture
def auth_headers(token):
    return {"auth-token": token}
