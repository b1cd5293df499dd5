"""
FastAPI application for the True Champion API.

Serves true standings, team detail and weekly analysis from the key/value
cache, plus refresh endpoints that pull new data from ESPN:
- msgspec JSON serialization
- GZip compression
- Per-request timing header
- Consistent error envelope
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

import msgspec
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from ..core.config import Settings, get_settings
from ..handlers import create_provider
from ..handlers.base import LeagueDataProvider
from ..repositories import create_repository
from ..repositories.league import LeagueRepository
from .errors import APIError, api_error_handler
from .routers import dashboard, refresh, standings, teams, weeks

logger = logging.getLogger(__name__)


class MSGSpecResponse(Response):
    """Custom response class using msgspec for fast JSON serialization."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        if content is None:
            return b""
        return msgspec.json.encode(content)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.

    Startup:
    - Build the cache-backed repository unless one was injected
    - Build the league provider (ESPN or mock) unless one was injected

    Shutdown:
    - Close the provider's HTTP client if this lifespan created it
    """
    settings: Settings = app.state.settings
    logger.info("Starting %s...", settings.app_name)

    if app.state.repository is None:
        app.state.repository = create_repository(settings)

    owns_provider = False
    if app.state.provider is None:
        try:
            app.state.provider = create_provider(settings)
            owns_provider = True
        except ValueError as e:
            # Read endpoints still work from cached data
            logger.warning("League provider not configured: %s", e)

    yield

    logger.info("Shutting down %s...", settings.app_name)
    if owns_provider:
        await app.state.provider.close()
        app.state.provider = None


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[LeagueRepository] = None,
    provider: Optional[LeagueDataProvider] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to environment settings)
        repository: Pre-built repository; built in the lifespan when None
        provider: Pre-built league provider; built in the lifespan when None

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="All-play true records for fantasy football leagues",
        version=settings.app_version,
        default_response_class=MSGSpecResponse,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository
    app.state.provider = provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=settings.cors_expose_headers,
    )

    # GZip compression middleware - compresses responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"
        return response

    app.add_exception_handler(APIError, api_error_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with consistent format."""
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        show_detail = settings.debug and settings.environment != "production"
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "detail": str(exc) if show_detail else None,
                }
            },
        )

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(tz=timezone.utc).isoformat()}

    @app.get("/health/cache", tags=["health"])
    async def health_check_cache(request: Request):
        """Cache status check with stats."""
        repo: Optional[LeagueRepository] = request.app.state.repository
        if repo is None:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "cache": None,
                    "timestamp": datetime.now(tz=timezone.utc).isoformat(),
                },
            )
        return {
            "status": "healthy",
            "cache": repo.backend.get_stats(),
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
            "season": settings.espn_season,
        }

    prefix = settings.api_prefix
    app.include_router(standings.router, prefix=f"{prefix}/standings", tags=["standings"])
    app.include_router(dashboard.router, prefix=f"{prefix}/dashboard", tags=["dashboard"])
    app.include_router(teams.router, prefix=f"{prefix}/teams", tags=["teams"])
    app.include_router(weeks.router, prefix=f"{prefix}/weeks", tags=["weeks"])
    app.include_router(refresh.router, prefix=prefix, tags=["refresh"])

    return app
