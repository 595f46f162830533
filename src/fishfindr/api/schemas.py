"""Pydantic request/response schemas for the FishFindr API."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from fishfindr.hotspots import HotspotReport


def _new_id() -> str:
    return str(uuid4())


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class LocationCreate(BaseModel):
    """Body of ``POST /api/v1/location``; id and timestamp are generated when omitted."""

    id: str = Field(default_factory=_new_id, min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    timestamp: str = Field(default_factory=_now)


class LocationUpdate(BaseModel):
    """Body of ``PUT /api/v1/location/{id}``; id and timestamp never change."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class LocationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    latitude: float
    longitude: float
    timestamp: str


# --- Cluster report schemas ---


class ClusterMember(BaseModel):
    id: str
    lat: float
    lng: float


class ClusterSchema(BaseModel):
    label: int
    size: int
    members: list[ClusterMember]


class ClusterReportResponse(BaseModel):
    epsilon: float
    min_points: int
    metric: str
    location_count: int
    clusters: list[ClusterSchema] = []
    noise: list[ClusterMember] = []


def _member(report: HotspotReport, index: int) -> ClusterMember:
    loc = report.locations[index]
    return ClusterMember(id=loc.id, lat=loc.latitude, lng=loc.longitude)


def report_to_response(report: HotspotReport) -> ClusterReportResponse:
    """Flatten a ``HotspotReport`` into the JSON cluster report."""
    return ClusterReportResponse(
        epsilon=report.config.epsilon,
        min_points=report.config.min_points,
        metric=report.config.metric,
        location_count=len(report.locations),
        clusters=[
            ClusterSchema(
                label=cluster.label,
                size=len(cluster),
                members=[_member(report, i) for i in cluster.ordered_members()],
            )
            for cluster in report.result.clusters
        ],
        noise=[_member(report, i) for i in sorted(report.result.noise)],
    )
