"""
cep_weather.api.entry.app

FastAPI app factory for the entry service (first hop).
"""

from __future__ import annotations

import httpx
from fastapi import FastAPI

from cep_weather.api.base import create_service_app
from cep_weather.api.entry.routes import router as cep_router
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import EntrySettings


def create_app(
    *,
    settings: EntrySettings,
    tracing: Tracing | None = None,
    http: httpx.AsyncClient | None = None,
) -> FastAPI:
    return create_service_app(
        title="CEP Entry Service",
        settings=settings,
        routers=[cep_router],
        tracing=tracing,
        http=http,
    )
