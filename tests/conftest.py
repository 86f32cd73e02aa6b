"""Shared test fixtures: in-memory DB, fake route provider, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - Every client gets a fresh GeoQueryCache and a call-counting fake provider
    - Rate limiting is disabled so tests can sign up many users
"""

import os

# Must be set before app modules read settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.errors import ProviderError
from app.main import app
from app.models import Base
from app.services.geo_cache import GeoQueryCache
from app.services.tracks import RouteSearchGateway
from app.services.users import UserStore


class FakeProvider:
    """Route search provider that records queries and returns canned elements."""

    def __init__(self):
        self.queries = []
        self.result = [{"type": "relation", "id": 1, "tags": {"route": "hiking"}}]
        self.error = None

    @property
    def calls(self) -> int:
        return len(self.queries)

    async def execute(self, query: str):
        self.queries.append(query)
        if self.error:
            raise ProviderError(self.error)
        return self.result


@pytest.fixture
async def test_engine():
    # StaticPool: one shared connection, so every session sees the same memory DB
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return UserStore(test_db)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def cache():
    return GeoQueryCache()


@pytest.fixture
def gateway(provider, cache):
    return RouteSearchGateway(provider, cache)


@pytest.fixture
async def client(test_session_factory, gateway):
    """FastAPI test client with DB dependency and route gateway replaced."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.route_gateway = gateway

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def signup(client):
    """Factory that signs a user up and returns the response body."""
    async def _signup(username="al", password="abcde", email=None):
        res = await client.post(
            "/signup",
            json={"username": username, "password": password, "email": email or f"{username}@a.com"},
        )
        assert res.status_code == 201, res.text
        return res.json()["response"]
    return _signup
