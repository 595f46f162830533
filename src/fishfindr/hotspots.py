"""Hot-spot pipeline: load every stored location and cluster it.

Clustering is recomputed from the full location list on every call; no
result is cached or persisted.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from fishfindr.clustering import (
    ClusteringConfig,
    ClusterResult,
    Point,
    cluster_points,
    get_metric,
)
from fishfindr.models.location import Location
from fishfindr.store import LocationRepository

logger = structlog.get_logger()


@dataclass
class HotspotReport:
    """Locations, their projected points and the clustering of those points.

    ``points[i]`` is the projection of ``locations[i]``; cluster member
    indices refer to both lists.
    """

    locations: list[Location]
    points: list[Point]
    result: ClusterResult
    config: ClusteringConfig = field(default_factory=ClusteringConfig)


def locations_to_points(locations: Sequence[Location]) -> list[Point]:
    """Project locations onto the clustering plane as ``(latitude, longitude)``."""
    return [Point(loc.latitude, loc.longitude) for loc in locations]


def build_report(locations: Sequence[Location], config: ClusteringConfig) -> HotspotReport:
    """Cluster an already loaded location list."""
    points = locations_to_points(locations)
    result = cluster_points(
        points,
        epsilon=config.epsilon,
        min_points=config.min_points,
        distance=get_metric(config.metric),
    )
    logger.info(
        "locations_clustered",
        locations=len(points),
        clusters=len(result.clusters),
        noise=len(result.noise),
        epsilon=config.epsilon,
        min_points=config.min_points,
        metric=config.metric,
    )
    return HotspotReport(locations=list(locations), points=points, result=result, config=config)


async def compute_hotspots(
    repository: LocationRepository, config: ClusteringConfig
) -> HotspotReport:
    """Load all locations from *repository* and cluster them.

    Raises:
        UpstreamUnavailableError: the store could not supply the locations.
        InvalidParameterError: *config* holds an unusable epsilon/min_points.
    """
    locations = await repository.all()
    return build_report(locations, config)
