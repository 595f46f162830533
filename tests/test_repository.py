"""Tests for the location repository."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from fishfindr.errors import (
    DuplicateLocationError,
    LocationNotFoundError,
    UpstreamUnavailableError,
)
from fishfindr.models.location import Location
from fishfindr.store import LocationRepository, get_write_lock


def _location(loc_id: str, lat: float = 42.36, lng: float = -71.05) -> Location:
    return Location(id=loc_id, latitude=lat, longitude=lng, timestamp="2026-05-01T06:30:00Z")


@pytest.mark.asyncio
async def test_migrate_creates_table():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    factory = async_sessionmaker(engine, expire_on_commit=False)
    try:
        async with factory() as session:
            repo = LocationRepository(session)
            await repo.migrate()
            await repo.migrate()  # idempotent
            await repo.create(_location("after-migrate"))
            assert [loc.id for loc in await repo.all()] == ["after-migrate"]
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_create_and_get(test_session_factory):
    async with test_session_factory() as session:
        stored = await LocationRepository(session).create(_location("abc", 41.5, -70.25))
        assert stored.id == "abc"

    async with test_session_factory() as session:
        loc = await LocationRepository(session).get_by_id("abc")
        assert (loc.latitude, loc.longitude) == (41.5, -70.25)
        assert loc.timestamp == "2026-05-01T06:30:00Z"


@pytest.mark.asyncio
async def test_create_duplicate_id(test_session_factory):
    async with test_session_factory() as session:
        repo = LocationRepository(session)
        await repo.create(_location("dup"))
        with pytest.raises(DuplicateLocationError):
            await repo.create(_location("dup", 0.0, 0.0))

        # The failed insert is rolled back and the session stays usable
        assert [loc.id for loc in await repo.all()] == ["dup"]


@pytest.mark.asyncio
async def test_all_preserves_insertion_order(test_session_factory):
    ids = ["zulu", "alpha", "mike", "bravo"]
    async with test_session_factory() as session:
        repo = LocationRepository(session)
        for loc_id in ids:
            await repo.create(_location(loc_id))

    async with test_session_factory() as session:
        assert [loc.id for loc in await LocationRepository(session).all()] == ids


@pytest.mark.asyncio
async def test_all_empty(test_session_factory):
    async with test_session_factory() as session:
        assert await LocationRepository(session).all() == []


@pytest.mark.asyncio
async def test_get_missing(test_session_factory):
    async with test_session_factory() as session:
        with pytest.raises(LocationNotFoundError):
            await LocationRepository(session).get_by_id("missing")


@pytest.mark.asyncio
async def test_update_only_touches_one_row(test_session_factory, seeded_db):
    async with test_session_factory() as session:
        repo = LocationRepository(session)
        updated = await repo.update("loc-a", latitude=10.0, longitude=20.0)
        assert (updated.latitude, updated.longitude) == (10.0, 20.0)
        assert updated.timestamp == "2026-05-01T06:30:00Z"

    async with test_session_factory() as session:
        repo = LocationRepository(session)
        stored = await repo.get_by_id("loc-a")
        assert stored.latitude == 10.0
        assert stored.timestamp == "2026-05-01T06:30:00Z"
        assert (await repo.get_by_id("loc-b")).latitude == 42.3611


@pytest.mark.asyncio
async def test_update_missing(test_session_factory):
    async with test_session_factory() as session:
        with pytest.raises(LocationNotFoundError):
            await LocationRepository(session).update("ghost", latitude=1.0, longitude=2.0)


@pytest.mark.asyncio
async def test_delete(test_session_factory, seeded_db):
    async with test_session_factory() as session:
        repo = LocationRepository(session)
        await repo.delete("loc-far")
        assert "loc-far" not in [loc.id for loc in await repo.all()]

        with pytest.raises(LocationNotFoundError):
            await repo.delete("loc-far")


@pytest.mark.asyncio
async def test_unavailable_store(broken_session_factory):
    async with broken_session_factory() as session:
        repo = LocationRepository(session)
        with pytest.raises(UpstreamUnavailableError):
            await repo.all()
        with pytest.raises(UpstreamUnavailableError):
            await repo.get_by_id("x")


@pytest.mark.asyncio
async def test_write_to_unavailable_store(broken_session_factory):
    async with broken_session_factory() as session:
        with pytest.raises(UpstreamUnavailableError):
            await LocationRepository(session).create(_location("x"))


# ---------------------------------------------------------------------------
# Write serialization
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_concurrent_creates_all_land(test_session_factory):
    async def submit(i: int) -> None:
        async with test_session_factory() as session:
            await LocationRepository(session).create(_location(f"c-{i}", 40 + i / 100, -70.0))

    await asyncio.gather(*(submit(i) for i in range(20)))

    async with test_session_factory() as session:
        ids = {loc.id for loc in await LocationRepository(session).all()}
    assert ids == {f"c-{i}" for i in range(20)}


@pytest.mark.asyncio
async def test_create_waits_for_write_lock(test_session_factory):
    lock = get_write_lock()
    async with test_session_factory() as session:
        repo = LocationRepository(session)
        assert repo.write_lock is lock

        await lock.acquire()
        task = asyncio.create_task(repo.create(_location("queued")))
        await asyncio.sleep(0.05)
        assert not task.done()

        lock.release()
        stored = await asyncio.wait_for(task, timeout=5)
        assert stored.id == "queued"


@pytest.mark.asyncio
async def test_reads_do_not_take_write_lock(test_session_factory, seeded_db):
    lock = get_write_lock()
    async with lock:
        async with test_session_factory() as session:
            locations = await asyncio.wait_for(LocationRepository(session).all(), timeout=5)
    assert len(locations) == 4
