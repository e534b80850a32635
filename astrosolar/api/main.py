"""
FastAPI application entry point for the AstroSolar API.

Provides the root health endpoint and serves as the application factory.
Settings are loaded at startup; the lifespan builds the storage backend and
upstream clients and stores them on app.state for route handlers. Domain
errors are mapped to HTTP responses here.

CHANGELOG:
- 2026-10-18: Register comparisons router
- 2026-10-18: Map PreconditionError to 422 and UpstreamError to 502
- 2026-10-18: Initial creation
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from astrosolar import __version__
from astrosolar.api.calculations import router as calculations_router
from astrosolar.api.comparisons import router as comparisons_router
from astrosolar.api.health import router as health_router
from astrosolar.api.projects import router as projects_router
from astrosolar.api.solar import router as solar_router
from astrosolar.clients.errors import UpstreamError
from astrosolar.clients.geocoding import GeocodingClient
from astrosolar.clients.nasa_power import PowerClient
from astrosolar.config import Settings, get_settings
from astrosolar.core.calculator import PreconditionError
from astrosolar.log import configure_logging
from astrosolar.storage import Storage, create_storage

logger = logging.getLogger(__name__)


async def _precondition_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def _upstream_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=502, content={"detail": str(exc)})


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
    power_client: PowerClient | None = None,
    geocoder: GeocodingClient | None = None,
    configure_logs: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Any collaborator not passed in is built from settings at startup.

    Args:
        settings: Service settings; defaults to environment-loaded Settings.
        storage: Storage backend; defaults to the one DATABASE_URL selects.
        power_client: NASA POWER client.
        geocoder: Place-name resolver.
        configure_logs: Install the JSON log handler on startup.

    Returns:
        FastAPI: The configured application.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan: build collaborators, close storage on exit."""
        if configure_logs:
            configure_logging(settings.log_level)

        app.state.settings = settings
        app.state.storage = storage or await create_storage(settings)
        app.state.power_client = power_client or PowerClient(settings)
        app.state.geocoder = geocoder or GeocodingClient(settings)

        logger.info(
            "AstroSolar API ready (storage=%s, cache=%s, mock_fallback=%s)",
            type(app.state.storage).__name__,
            "redis" if settings.redis_url else "off",
            settings.mock_fallback,
        )
        yield
        await app.state.storage.close()
        logger.info("AstroSolar API shutting down")

    app = FastAPI(
        title="AstroSolar API",
        description="Satellite solar resource analysis for off-world power systems.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
        expose_headers=["X-Data-Source", "Content-Disposition"],
    )

    app.add_exception_handler(PreconditionError, _precondition_handler)
    app.add_exception_handler(UpstreamError, _upstream_handler)

    app.include_router(health_router)
    app.include_router(solar_router)
    app.include_router(calculations_router)
    app.include_router(projects_router)
    app.include_router(comparisons_router)

    @app.get("/")
    async def root() -> dict:
        """Root health check endpoint.

        Returns:
            dict: JSON object with application status.
        """
        return {"status": "ok"}

    return app


app = create_app()
