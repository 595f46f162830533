"""Tests for the heat-map point feed."""

import json

from fishfindr.heatmap import FeedPoint, points_feed, points_json
from fishfindr.models.location import Location


def _loc(loc_id: str, lat: float, lng: float) -> Location:
    return Location(id=loc_id, latitude=lat, longitude=lng, timestamp="t")


class TestPointsFeed:

    def test_maps_latitude_and_longitude_separately(self):
        feed = points_feed([_loc("a", 42.36, -71.05)])
        assert feed == [FeedPoint(lat=42.36, lng=-71.05)]

    def test_preserves_order_and_length(self):
        locations = [_loc(str(i), float(i), float(-i)) for i in range(5)]
        feed = points_feed(locations)
        assert len(feed) == 5
        assert [p.lat for p in feed] == [0.0, 1.0, 2.0, 3.0, 4.0]
        assert [p.lng for p in feed] == [0.0, -1.0, -2.0, -3.0, -4.0]

    def test_empty(self):
        assert points_feed([]) == []

    def test_accepts_any_object_with_coordinates(self):
        class Catch:
            latitude = 1.0
            longitude = 2.0

        assert points_feed([Catch()]) == [FeedPoint(lat=1.0, lng=2.0)]


class TestPointsJson:

    def test_only_lat_and_lng_are_exposed(self):
        payload = json.loads(points_json([_loc("secret-id", 48.1, 7.8)]))
        assert payload == [{"lat": 48.1, "lng": 7.8}]

    def test_empty_is_empty_array(self):
        assert json.loads(points_json([])) == []
