"""
cep_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (tracing, shared HTTP client).
"""

from __future__ import annotations

import httpx
from fastapi import Request

from cep_weather.observability.tracing import Tracing


def tracing_from_app(request: Request) -> Tracing:
    # Created once in the app lifespan (see `cep_weather.api.base.create_service_app`).
    return request.app.state.tracing  # type: ignore[attr-defined]


def http_from_app(request: Request) -> httpx.AsyncClient:
    return request.app.state.http  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Per-service dependencies (typed settings, service objects) live next to their routes.
