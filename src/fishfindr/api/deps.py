"""FastAPI dependency injection for DB sessions, the store and clustering config."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fishfindr.clustering import ClusteringConfig, load_clustering_config
from fishfindr.config.settings import get_settings
from fishfindr.db.session import get_session_factory
from fishfindr.store import LocationRepository


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session for request handling."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def get_repository(db: AsyncSession = Depends(get_db)) -> LocationRepository:
    return LocationRepository(db)


def get_clustering_config() -> ClusteringConfig:
    """Load clustering parameters from the configured YAML file."""
    return load_clustering_config(get_settings().clustering_config_path)
