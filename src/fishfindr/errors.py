"""Exception types shared across the store, the engine and the API."""

from __future__ import annotations


class FishFindrError(Exception):
    """Base class for all errors raised by fishfindr."""


class InvalidParameterError(FishFindrError, ValueError):
    """Clustering parameters are malformed or out of range (``epsilon <= 0`` or ``min_points < 1``)."""


class UpstreamUnavailableError(FishFindrError):
    """The location store could not be read or written."""


class DuplicateLocationError(FishFindrError):
    """A location with the same id already exists."""

    def __init__(self, location_id: str) -> None:
        super().__init__(f"location {location_id!r} already exists")
        self.location_id = location_id


class LocationNotFoundError(FishFindrError):
    """No location is stored under the requested id."""

    def __init__(self, location_id: str) -> None:
        super().__init__(f"location {location_id!r} does not exist")
        self.location_id = location_id
