"""Shared fixtures: app wired to an in-memory Mongo (mongomock) and an async HTTP client."""
import os

# Set test environment variables before importing app modules
os.environ.setdefault("LOG_LEVEL", "WARNING")
# Tests pass the secret explicitly to Settings
os.environ.pop("JWT_SECRET", None)
os.environ.pop("ACCESS_TOKEN_SECRET", None)

import mongomock
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notes_api.api.deps import get_db
from notes_api.core.config import Settings
from notes_api.main import create_app

TEST_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret=TEST_SECRET, mongo_db="notes_test", log_level="WARNING")


@pytest.fixture
def db():
    """Fresh in-memory database per test, with the unique email index the bootstrap creates."""
    database = mongomock.MongoClient()["notes_test"]
    database["user"].create_index("email", unique=True)
    return database


@pytest.fixture
def app(settings, db):
    application = create_app(settings)
    application.dependency_overrides[get_db] = lambda: db
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def signup(client):
    """Creates an account and returns its access token."""

    async def _signup(email: str = "a@x.com", full_name: str = "Ann", password: str = "p") -> str:
        r = await client.post(
            "/create-account",
            json={"fullName": full_name, "email": email, "password": password},
        )
        assert r.status_code == 201, r.text
        return r.json()["accessToken"]

    return _signup
