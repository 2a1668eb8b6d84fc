"""
cep_weather.api.weather.app

FastAPI app factory for the weather service (second hop).
"""

from __future__ import annotations

import httpx
from fastapi import FastAPI

from cep_weather.api.base import create_service_app
from cep_weather.api.weather.routes import router as weather_router
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import WeatherSettings


def create_app(
    *,
    settings: WeatherSettings,
    tracing: Tracing | None = None,
    http: httpx.AsyncClient | None = None,
) -> FastAPI:
    return create_service_app(
        title="CEP Weather Service",
        settings=settings,
        routers=[weather_router],
        tracing=tracing,
        http=http,
    )
