"""Durable storage for reported catch locations."""

from .repository import LocationRepository, get_write_lock

__all__ = ["LocationRepository", "get_write_lock"]
