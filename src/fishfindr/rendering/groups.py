"""Turn a clustering result into drawable point groups."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from fishfindr.clustering import ClusterResult, Point

NOISE_GROUP_LABEL = "noise"


@dataclass
class PointGroup:
    """Points drawn together under one legend label."""

    label: str
    xs: list[float] = field(default_factory=list)
    ys: list[float] = field(default_factory=list)
    is_noise: bool = False

    @property
    def points(self) -> list[tuple[float, float]]:
        return list(zip(self.xs, self.ys))

    def __len__(self) -> int:
        return len(self.xs)


def _group(label: str, indices: Sequence[int], points: Sequence[Point], is_noise: bool = False) -> PointGroup:
    return PointGroup(
        label=label,
        xs=[points[i][0] for i in indices],
        ys=[points[i][1] for i in indices],
        is_noise=is_noise,
    )


def point_groups(result: ClusterResult, points: Sequence[Point]) -> list[PointGroup]:
    """One group per cluster in label order, then a single noise group.

    Member points keep input order within a group.  The noise group is
    always present, even when empty.
    """
    groups = [
        _group(f"Cluster {cluster.label}", cluster.ordered_members(), points)
        for cluster in result.clusters
    ]
    groups.append(_group(NOISE_GROUP_LABEL, sorted(result.noise), points, is_noise=True))
    return groups
