"""Point feed endpoint -- GET /api/v1/json for the heat-map client."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from fishfindr.api.deps import get_repository
from fishfindr.heatmap import points_json
from fishfindr.store import LocationRepository

router = APIRouter(prefix="/api/v1", tags=["feed"])


@router.get("/json")
async def point_feed(repo: LocationRepository = Depends(get_repository)) -> Response:
    """Return ``[{"lat": ..., "lng": ...}, ...]`` for every stored location.

    The feed is readable from any origin.
    """
    locations = await repo.all()
    return Response(
        content=points_json(locations),
        media_type="application/json",
        headers={"Access-Control-Allow-Origin": "*"},
    )
