"""Liveness probe."""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Report that the API process is up; does not touch the store."""
    return {"status": "ok", "service": "fishfindr"}
