"""
cep_weather.api.base

Shared FastAPI app factory for the entry and weather services.

Responsibilities:
- Configure logging once at app creation.
- Initialize and dispose process-wide infrastructure (tracer, HTTP connection pool).
- Register middleware and routers.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI

from cep_weather import __version__
from cep_weather.api.health import router as health_router
from cep_weather.observability.logging import configure_logging, get_logger
from cep_weather.observability.middleware import RequestContextMiddleware
from cep_weather.observability.tracing import Tracing, init_tracing
from cep_weather.settings import Settings

log = get_logger(__name__)


def create_service_app(
    *,
    title: str,
    settings: Settings,
    routers: Sequence[APIRouter],
    tracing: Tracing | None = None,
    http: httpx.AsyncClient | None = None,
) -> FastAPI:
    """
    `tracing` / `http` may be injected (tests, embedding); injected objects are
    not closed by the app, since the caller owns them.
    """

    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.app_env, port=settings.port)
        # Tracer init failures propagate and abort startup.
        app.state.tracing = tracing or init_tracing(settings)
        app.state.http = http or httpx.AsyncClient(timeout=settings.http_timeout_s)
        try:
            yield
        finally:
            if http is None:
                await app.state.http.aclose()
            if tracing is None:
                app.state.tracing.shutdown(settings.tracer_shutdown_timeout_s)
            log.info("shutdown")

    app = FastAPI(
        title=title,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    for router in routers:
        app.include_router(router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; request handling
# stays in `api.errors` and the per-service route modules.
