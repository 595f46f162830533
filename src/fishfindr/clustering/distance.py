"""Distance functions used to build epsilon-neighbourhoods.

Both take two ``(x, y)`` points and are symmetric.  ``planar_distance``
treats latitude/longitude as plain Cartesian coordinates, which is what the
default epsilon was calibrated against.  ``haversine_km`` is the
great-circle alternative; with it, epsilon is a real distance in km.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Literal

Coordinate = tuple[float, float]
Metric = Callable[[Coordinate, Coordinate], float]
MetricName = Literal["planar", "haversine"]

EARTH_RADIUS_KM = 6371.0


def planar_distance(a: Coordinate, b: Coordinate) -> float:
    """Euclidean distance between two points, in coordinate units."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometres between two (lat, lon) points."""
    lat1, lon1 = a
    lat2, lon2 = b
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


METRICS: dict[str, Metric] = {
    "planar": planar_distance,
    "haversine": haversine_km,
}


def get_metric(name: MetricName) -> Metric:
    try:
        return METRICS[name]
    except KeyError:
        raise ValueError(f"unknown distance metric {name!r}; expected one of {sorted(METRICS)}") from None
