"""
BlogNest Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite database file (aiosqlite) in tmp_path,
       so stores and services run real SQL and real transactions.

Fixture Hierarchy (all function-scoped):
    store            DocumentStore with tables created
    ├── credential_store / blog_store
    │   ├── account_service (bcrypt rounds = 4)
    │   └── blog_service
    ├── app          create_app() wired to the same store
    │   ├── test_client  HTTPX AsyncClient over ASGITransport
    │   └── api          BlogApiClient over ASGITransport
    └── alice        a registered user (UserPublic)
"""

import os
import tempfile

# Override settings for testing BEFORE any blognest imports: the default
# Settings instance (and blognest.main:app) are built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="blognest_test_"), "import.db"
)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from blognest.client import BlogApiClient
from blognest.config import Settings
from blognest.database import DocumentStore
from blognest.main import create_app
from blognest.security import PasswordHasher
from blognest.services import AccountService, BlogService
from blognest.stores import BlogStore, CredentialStore


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'blognest.db'}"


@pytest_asyncio.fixture
async def store(database_url):
    """A DocumentStore on a fresh database with all tables created."""
    document_store = DocumentStore(database_url)
    await document_store.create_all()
    yield document_store
    await document_store.dispose()


@pytest.fixture
def credential_store(store) -> CredentialStore:
    return CredentialStore(store)


@pytest.fixture
def blog_store(store) -> BlogStore:
    return BlogStore(store)


@pytest.fixture
def hasher() -> PasswordHasher:
    # Minimum bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def account_service(credential_store, hasher) -> AccountService:
    return AccountService(credential_store, hasher)


@pytest.fixture
def blog_service(blog_store) -> BlogService:
    return BlogService(blog_store)


@pytest_asyncio.fixture
async def alice(account_service):
    """A registered user: alice / a@x.com / pw123."""
    return await account_service.register("alice", "a@x.com", "pw123")


@pytest.fixture
def app(store, database_url):
    settings = Settings(database_url=database_url, bcrypt_rounds=4, log_level="WARNING")
    return create_app(settings=settings, store=store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient configured to talk to the FastAPI app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def api(app):
    """The presentation-layer API client, routed to the in-process app."""
    async with BlogApiClient(base_url="http://test", transport=ASGITransport(app=app)) as client:
        yield client
