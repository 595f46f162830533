"""Hot-spot endpoints: the rendered cluster plot and its JSON twin."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from starlette.concurrency import run_in_threadpool

from fishfindr.api.deps import get_clustering_config, get_repository
from fishfindr.api.schemas import ClusterReportResponse, report_to_response
from fishfindr.clustering import ClusteringConfig
from fishfindr.hotspots import HotspotReport, build_report
from fishfindr.rendering import point_groups, render_png
from fishfindr.store import LocationRepository

router = APIRouter(tags=["hotspots"])


async def _load_report(repo: LocationRepository, config: ClusteringConfig) -> HotspotReport:
    # Clustering is quadratic in the number of locations; keep it off the event loop
    locations = await repo.all()
    return await run_in_threadpool(build_report, locations, config)


@router.get("/graph", response_class=Response)
async def cluster_graph(
    repo: LocationRepository = Depends(get_repository),
    config: ClusteringConfig = Depends(get_clustering_config),
) -> Response:
    """Render the current hot spots as a PNG scatter plot."""
    report = await _load_report(repo, config)
    groups = point_groups(report.result, report.points)
    png = await run_in_threadpool(render_png, groups)
    return Response(content=png, media_type="image/png")


@router.get("/api/v1/clusters", response_model=ClusterReportResponse)
async def cluster_report(
    repo: LocationRepository = Depends(get_repository),
    config: ClusteringConfig = Depends(get_clustering_config),
) -> ClusterReportResponse:
    """Return cluster membership and noise as JSON."""
    report = await _load_report(repo, config)
    return report_to_response(report)
