"""REST API endpoints for submitting and managing catch locations."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from fishfindr.api.deps import get_repository
from fishfindr.api.schemas import LocationCreate, LocationSchema, LocationUpdate
from fishfindr.errors import DuplicateLocationError, LocationNotFoundError
from fishfindr.models.location import Location
from fishfindr.store import LocationRepository

router = APIRouter(prefix="/api/v1/location", tags=["locations"])


@router.post("", response_model=LocationSchema)
async def create_location(
    body: LocationCreate,
    repo: LocationRepository = Depends(get_repository),
) -> LocationSchema:
    """Store a new catch location and echo it back."""
    location = Location(
        id=body.id,
        latitude=body.latitude,
        longitude=body.longitude,
        timestamp=body.timestamp,
    )
    try:
        stored = await repo.create(location)
    except DuplicateLocationError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return LocationSchema.model_validate(stored)


@router.get("", response_model=list[LocationSchema])
async def list_locations(
    repo: LocationRepository = Depends(get_repository),
) -> list[LocationSchema]:
    """Return every stored location in submission order."""
    return [LocationSchema.model_validate(loc) for loc in await repo.all()]


@router.get("/{location_id}", response_model=LocationSchema)
async def get_location(
    location_id: str,
    repo: LocationRepository = Depends(get_repository),
) -> LocationSchema:
    try:
        location = await repo.get_by_id(location_id)
    except LocationNotFoundError:
        raise HTTPException(status_code=404, detail="Location not found")
    return LocationSchema.model_validate(location)


@router.put("/{location_id}", response_model=LocationSchema)
async def update_location(
    location_id: str,
    body: LocationUpdate,
    repo: LocationRepository = Depends(get_repository),
) -> LocationSchema:
    """Replace the coordinates of an existing location."""
    try:
        location = await repo.update(
            location_id,
            latitude=body.latitude,
            longitude=body.longitude,
        )
    except LocationNotFoundError:
        raise HTTPException(status_code=404, detail="Location not found")
    return LocationSchema.model_validate(location)


@router.delete("/{location_id}", status_code=204)
async def delete_location(
    location_id: str,
    repo: LocationRepository = Depends(get_repository),
) -> Response:
    try:
        await repo.delete(location_id)
    except LocationNotFoundError:
        raise HTTPException(status_code=404, detail="Location not found")
    return Response(status_code=204)
