"""Density-based clustering (DBSCAN) of catch locations.

A point whose epsilon-neighbourhood (itself included) holds at least
``min_points`` points is a *core* point.  Core points that are neighbours
of each other are linked in a networkx graph; every connected component
of that graph seeds one cluster.  Non-core points join the cluster of a
neighbouring core point, or stay noise when no core point reaches them.

This produces exactly what the classic sequential expansion produces when
points are visited in input order:

- clusters are labelled 0, 1, ... by the position of their first core
  point, which is the order the sequential pass would discover them in;
- a border point reachable from several clusters goes to the lowest
  label, the cluster whose expansion would have claimed it first.

The pass is a pure function of its inputs.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

import networkx as nx
import numpy as np
from scipy.spatial import cKDTree

from fishfindr.errors import InvalidParameterError

from .distance import Metric, planar_distance

NOISE = -1


class Point(NamedTuple):
    """2-D projection of a location: ``x`` is latitude, ``y`` longitude."""

    x: float
    y: float


@dataclass
class Cluster:
    """One density-connected group found by a clustering pass.

    Attributes:
        label: Dense cluster id, assigned from 0 in discovery order.
        members: Indices into the input point sequence.
    """

    label: int
    members: set[int] = field(default_factory=set)

    def ordered_members(self) -> list[int]:
        return sorted(self.members)

    def __len__(self) -> int:
        return len(self.members)


@dataclass
class ClusterResult:
    """Outcome of one clustering pass.

    ``clusters`` is ordered by label; together with ``noise`` it covers
    every input index exactly once.
    """

    clusters: list[Cluster] = field(default_factory=list)
    noise: set[int] = field(default_factory=set)

    @property
    def point_count(self) -> int:
        return len(self.noise) + sum(len(c) for c in self.clusters)

    def labels(self) -> list[int]:
        """Per-point cluster label, ``NOISE`` (-1) for noise points."""
        labels = [NOISE] * self.point_count
        for cluster in self.clusters:
            for index in cluster.members:
                labels[index] = cluster.label
        return labels


def _validate(epsilon: float, min_points: int) -> None:
    # ``not epsilon > 0`` also rejects NaN
    if not epsilon > 0:
        raise InvalidParameterError(f"epsilon must be positive, got {epsilon!r}")
    if min_points < 1:
        raise InvalidParameterError(f"min_points must be at least 1, got {min_points!r}")


def _pairs_within(
    points: Sequence[Point],
    epsilon: float,
    distance: Metric,
) -> Iterable[tuple[int, int]]:
    """Index pairs ``(i, j)``, ``i < j``, at most *epsilon* apart."""
    if distance is planar_distance:
        return cKDTree(np.asarray(points, dtype=float)).query_pairs(r=epsilon)
    n = len(points)
    return (
        (i, j)
        for i in range(n)
        for j in range(i + 1, n)
        if distance(points[i], points[j]) <= epsilon
    )


def region_query(
    points: Sequence[Point],
    epsilon: float,
    distance: Metric,
) -> list[list[int]]:
    """Return the epsilon-neighbourhood of every point, itself included.

    Each pair is found once and recorded on both sides, so the neighbour
    relation is symmetric whatever the metric.  The planar metric is
    answered by a KD-tree; any other metric measures every pair.
    """
    neighbourhoods: list[list[int]] = [[i] for i in range(len(points))]
    if not points:
        return neighbourhoods
    for i, j in _pairs_within(points, epsilon, distance):
        neighbourhoods[i].append(j)
        neighbourhoods[j].append(i)
    for hood in neighbourhoods:
        hood.sort()
    return neighbourhoods


def cluster_points(
    points: Sequence[Point | tuple[float, float]],
    epsilon: float,
    min_points: int,
    distance: Metric | None = None,
) -> ClusterResult:
    """Partition *points* into density-connected clusters and noise.

    Args:
        points: ``(x, y)`` coordinates.  Duplicates are distinct points.
        epsilon: Neighbourhood radius, in the unit *distance* returns.
        min_points: Minimum neighbourhood size (self included) of a core
            point.
        distance: Symmetric distance function, planar Euclidean when
            omitted.

    Returns:
        A ``ClusterResult`` whose clusters and noise partition
        ``range(len(points))``.

    Raises:
        InvalidParameterError: ``epsilon <= 0`` or ``min_points < 1``.
    """
    _validate(epsilon, min_points)
    if distance is None:
        distance = planar_distance

    pts = [Point(float(p[0]), float(p[1])) for p in points]
    if not pts:
        return ClusterResult()

    neighbourhoods = region_query(pts, epsilon, distance)
    is_core = [len(hood) >= min_points for hood in neighbourhoods]

    # Core-to-core reachability graph
    G = nx.Graph()
    for i, hood in enumerate(neighbourhoods):
        if not is_core[i]:
            continue
        G.add_node(i)
        for j in hood:
            if j != i and is_core[j]:
                G.add_edge(i, j)

    components = sorted(nx.connected_components(G), key=min)
    clusters = [Cluster(label=label, members=set(component)) for label, component in enumerate(components)]

    label_of = {i: c.label for c in clusters for i in c.members}
    noise: set[int] = set()
    for i, hood in enumerate(neighbourhoods):
        if is_core[i]:
            continue
        reaching = [label_of[j] for j in hood if is_core[j]]
        if reaching:
            clusters[min(reaching)].members.add(i)
        else:
            noise.add(i)

    return ClusterResult(clusters=clusters, noise=noise)
