"""
XYFORA Backend — Test Configuration (conftest.py)
==================================================

Fixture Hierarchy:
    Function-scoped:
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── mock_store:      AsyncMock RecordStore for service unit tests
    ├── make_user / make_product: lightweight stand-ins for ORM rows
    ├── database_schema: creates/drops all tables in a temporary SQLite file
    ├── test_client:     HTTPX AsyncClient wired to the FastAPI app
    └── register:        coroutine that registers a user and returns its body
"""

import os
import tempfile
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

# Must happen before any xyfora import: settings are read at import time
_TEST_DIR = tempfile.mkdtemp(prefix="xyfora_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret-0123456789abcdef0123456789abcdef"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from xyfora.database import Base, database  # noqa: E402
from xyfora.models.ids import generate_object_id  # noqa: E402
from xyfora.services.record_store import RecordStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_store():
    """A RecordStore whose every method is an AsyncMock."""
    return AsyncMock(spec=RecordStore)


@pytest.fixture
def make_user():
    def _make(**overrides):
        data = {
            "id": generate_object_id(),
            "fullname": "Ada Lovelace",
            "email": "ada@xyfora.se",
            "password": "not-a-real-hash",
        }
        data.update(overrides)
        return SimpleNamespace(**data)
    return _make


@pytest.fixture
def make_product(make_user):
    def _make(author=None, **overrides):
        author = author or make_user()
        now = datetime.now(timezone.utc)
        data = {
            "id": generate_object_id(),
            "title": "Desk lamp",
            "price": 49.99,
            "author_id": author.id,
            "author": author,
            "created_at": now,
            "updated_at": now,
        }
        data.update(overrides)
        return SimpleNamespace(**data)
    return _make


# ══════════════════════════════════════════════════════════════════════════
# API fixtures (temporary SQLite database)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database_schema():
    """Fresh tables per test; the engine is disposed so each test loop gets its own."""
    import xyfora.models  # noqa: F401

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await database.dispose()


@pytest_asyncio.fixture
async def test_client(database_schema):
    from xyfora.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register(test_client):
    """Register a user through the API and return the 201 response body."""
    async def _register(email="a@x.com", fullname="A", password="p"):
        response = await test_client.post(
            "/auth/register",
            json={"fullname": fullname, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _register


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return bearer
