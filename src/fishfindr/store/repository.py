"""Location persistence.

``LocationRepository`` hides the SQL details behind a small API
(``migrate``, ``create``, ``all``, ``get_by_id``, ``update``, ``delete``).
Writes are serialized through a single lock per event loop so concurrent
submissions never interleave; reads run unlocked and see whatever was
committed when the query ran.
"""

from __future__ import annotations

import asyncio
import weakref

import sqlalchemy as sa
import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fishfindr.errors import (
    DuplicateLocationError,
    LocationNotFoundError,
    UpstreamUnavailableError,
)
from fishfindr.models.base import Base
from fishfindr.models.location import Location

logger = structlog.get_logger()

_write_locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock] = (
    weakref.WeakKeyDictionary()
)


def get_write_lock() -> asyncio.Lock:
    """Return the store-wide write lock for the running event loop."""
    loop = asyncio.get_running_loop()
    lock = _write_locks.get(loop)
    if lock is None:
        lock = _write_locks[loop] = asyncio.Lock()
    return lock


class LocationRepository:
    """Async data access for :class:`Location` rows."""

    def __init__(self, session: AsyncSession, write_lock: asyncio.Lock | None = None) -> None:
        self._session = session
        self._write_lock = write_lock

    @property
    def write_lock(self) -> asyncio.Lock:
        if self._write_lock is None:
            self._write_lock = get_write_lock()
        return self._write_lock

    async def migrate(self) -> None:
        """Create the ``locations`` table if it does not exist yet.

        Must run before anything reads or writes through the repository.
        """
        async with self.write_lock:
            try:
                conn = await self._session.connection()
                await conn.run_sync(Base.metadata.create_all)
                await self._session.commit()
            except SQLAlchemyError as exc:
                await self._session.rollback()
                logger.error("store_migration_failed", error=str(exc))
                raise UpstreamUnavailableError("could not migrate the location store") from exc

    async def create(self, location: Location) -> Location:
        """Insert *location* and return it as stored.

        Raises:
            DuplicateLocationError: a location with the same ``id`` exists.
            UpstreamUnavailableError: the database rejected the write.
        """
        async with self.write_lock:
            self._session.add(location)
            try:
                await self._session.commit()
            except IntegrityError as exc:
                await self._session.rollback()
                raise DuplicateLocationError(location.id) from exc
            except SQLAlchemyError as exc:
                await self._session.rollback()
                logger.error("store_write_failed", operation="create", error=str(exc))
                raise UpstreamUnavailableError("could not store the location") from exc

        logger.info(
            "location_created",
            location_id=location.id,
            latitude=location.latitude,
            longitude=location.longitude,
        )
        return location

    async def all(self) -> list[Location]:
        """Return every stored location in insertion order.

        Raises:
            UpstreamUnavailableError: the store could not be queried.
        """
        try:
            result = await self._session.execute(sa.select(Location).order_by(Location.pk))
        except SQLAlchemyError as exc:
            logger.error("store_unavailable", operation="all", error=str(exc))
            raise UpstreamUnavailableError("could not load locations") from exc
        return list(result.scalars().all())

    async def get_by_id(self, location_id: str) -> Location:
        """Return the location stored under *location_id*.

        Raises:
            LocationNotFoundError: nothing is stored under that id.
            UpstreamUnavailableError: the store could not be queried.
        """
        try:
            result = await self._session.execute(
                sa.select(Location).where(Location.id == location_id)
            )
        except SQLAlchemyError as exc:
            logger.error("store_unavailable", operation="get_by_id", error=str(exc))
            raise UpstreamUnavailableError("could not load location") from exc

        location = result.scalar_one_or_none()
        if location is None:
            raise LocationNotFoundError(location_id)
        return location

    async def update(
        self,
        location_id: str,
        *,
        latitude: float,
        longitude: float,
    ) -> Location:
        """Move one location; its id and submission timestamp are kept."""
        async with self.write_lock:
            location = await self.get_by_id(location_id)
            location.latitude = latitude
            location.longitude = longitude
            try:
                await self._session.commit()
            except SQLAlchemyError as exc:
                await self._session.rollback()
                logger.error("store_write_failed", operation="update", error=str(exc))
                raise UpstreamUnavailableError("could not update the location") from exc

        logger.info("location_updated", location_id=location_id)
        return location

    async def delete(self, location_id: str) -> None:
        """Delete one location.

        Raises:
            LocationNotFoundError: nothing is stored under that id.
        """
        async with self.write_lock:
            try:
                result = await self._session.execute(
                    sa.delete(Location).where(Location.id == location_id)
                )
                await self._session.commit()
            except SQLAlchemyError as exc:
                await self._session.rollback()
                logger.error("store_write_failed", operation="delete", error=str(exc))
                raise UpstreamUnavailableError("could not delete the location") from exc

        if result.rowcount == 0:
            raise LocationNotFoundError(location_id)
        logger.info("location_deleted", location_id=location_id)
