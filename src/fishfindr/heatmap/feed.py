"""Reduce stored locations to the ``{lat, lng}`` points the client plots.

The feed does not go through clustering: one point per location, in
store order.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from pydantic import BaseModel, TypeAdapter


class HasCoordinates(Protocol):
    latitude: float
    longitude: float


class FeedPoint(BaseModel):
    lat: float
    lng: float


_feed_adapter = TypeAdapter(list[FeedPoint])


def points_feed(locations: Iterable[HasCoordinates]) -> list[FeedPoint]:
    """Map each location to a ``FeedPoint``, preserving order and length."""
    return [FeedPoint(lat=loc.latitude, lng=loc.longitude) for loc in locations]


def points_json(locations: Iterable[HasCoordinates]) -> bytes:
    """Serialize the feed for *locations* as a JSON array."""
    return _feed_adapter.dump_json(points_feed(locations))
