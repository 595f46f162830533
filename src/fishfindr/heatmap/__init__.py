"""Public point feed consumed by the heat-map client."""

from .feed import FeedPoint, points_feed, points_json

__all__ = ["FeedPoint", "points_feed", "points_json"]
