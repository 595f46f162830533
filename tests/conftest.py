"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fishfindr.api.app import app
from fishfindr.api.deps import get_clustering_config, get_db
from fishfindr.clustering import ClusteringConfig
from fishfindr.models.base import Base
from fishfindr.models.location import Location

# Three catches a few hundredths of a degree apart plus one far away.
HOTSPOT_LOCATIONS = [
    ("loc-a", 42.3601, -71.0589),
    ("loc-b", 42.3611, -71.0579),
    ("loc-c", 42.3621, -71.0569),
    ("loc-far", 52.5200, 13.4050),
]


@pytest.fixture
def clustering_config() -> ClusteringConfig:
    """Operational defaults: epsilon 0.804672, min_points 3, planar metric."""
    return ClusteringConfig()


@pytest.fixture
async def test_engine():
    """Create an async SQLite in-memory engine with the schema in place."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def empty_engine():
    """In-memory engine without any tables, so every query fails."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the test engine."""
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest.fixture
async def broken_session_factory(empty_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(empty_engine, expire_on_commit=False)


def _client(session_factory, config: ClusteringConfig):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clustering_config] = lambda: config
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def api_client(test_session_factory, clustering_config):
    """Async HTTP client hitting the FastAPI app with the test DB."""
    async with _client(test_session_factory, clustering_config) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def broken_api_client(broken_session_factory, clustering_config):
    """Client whose store has no schema, simulating an unavailable store."""
    async with _client(broken_session_factory, clustering_config) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded_db(test_session_factory):
    """Seed the test DB with a three-location hot spot and one outlier."""
    async with test_session_factory() as session:
        async with session.begin():
            session.add_all(
                [
                    Location(id=loc_id, latitude=lat, longitude=lng, timestamp=f"2026-05-0{i + 1}T06:30:00Z")
                    for i, (loc_id, lat, lng) in enumerate(HOTSPOT_LOCATIONS)
                ]
            )
