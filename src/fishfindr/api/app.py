"""FastAPI application for the FishFindr API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from fishfindr.api.routes.feed import router as feed_router
from fishfindr.api.routes.health import router as health_router
from fishfindr.api.routes.hotspots import router as hotspots_router
from fishfindr.api.routes.locations import router as locations_router
from fishfindr.config.settings import get_settings
from fishfindr.db.session import get_session
from fishfindr.errors import InvalidParameterError, UpstreamUnavailableError
from fishfindr.store import LocationRepository

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with get_session() as session:
        await LocationRepository(session).migrate()
    logger.info("api_started")
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="FishFindr API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UpstreamUnavailableError)
    async def upstream_unavailable(request: Request, exc: UpstreamUnavailableError) -> JSONResponse:
        logger.warning("request_failed_upstream", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=424, content={"detail": str(exc)})

    @app.exception_handler(InvalidParameterError)
    async def invalid_parameter(request: Request, exc: InvalidParameterError) -> JSONResponse:
        logger.error("clustering_misconfigured", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    app.include_router(health_router)
    app.include_router(locations_router)
    app.include_router(feed_router)
    app.include_router(hotspots_router)

    # Catch-all static mount goes last so it never shadows the API routes
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


app = create_app()
