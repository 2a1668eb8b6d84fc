"""
tests.conftest

Shared fixtures: in-memory tracing, fake providers, and both apps wired in-process.

Responsibilities:
- Capture spans with the OpenTelemetry SDK in-memory exporter.
- Fake ViaCEP / WeatherAPI with `httpx.MockTransport`.
- Chain entry -> weather through `httpx.ASGITransport` (no real network).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON

from cep_weather.api.entry.app import create_app as create_entry_app
from cep_weather.api.weather.app import create_app as create_weather_app
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import EntrySettings, WeatherSettings
from fakes import FakeProviders


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracing(span_exporter: InMemorySpanExporter) -> Tracing:
    # Synchronous processor: spans are visible as soon as they end.
    provider = TracerProvider(sampler=ALWAYS_ON)
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return Tracing(provider=provider, instrumentation_name="tests")


@pytest.fixture
def providers() -> FakeProviders:
    return FakeProviders()


@pytest.fixture
def weather_settings() -> WeatherSettings:
    return WeatherSettings(app_env="test", weather_api_key="test-key", otel_exporter_enabled=False)


@pytest.fixture
def entry_settings() -> EntrySettings:
    return EntrySettings(
        app_env="test",
        service_b_url="http://serviceb/weather",
        otel_exporter_enabled=False,
    )


@pytest_asyncio.fixture
async def provider_http(providers: FakeProviders) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(providers.handler)) as http:
        yield http


@pytest_asyncio.fixture
async def weather_app(
    weather_settings: WeatherSettings,
    tracing: Tracing,
    provider_http: httpx.AsyncClient,
) -> AsyncIterator[FastAPI]:
    app = create_weather_app(settings=weather_settings, tracing=tracing, http=provider_http)
    # httpx ASGITransport does not manage lifespan automatically; do it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def weather_client(weather_app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=weather_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://serviceb") as client:
        yield client


@pytest_asyncio.fixture
async def entry_client(
    entry_settings: EntrySettings,
    tracing: Tracing,
    weather_app: FastAPI,
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=weather_app)) as downstream:
        app = create_entry_app(settings=entry_settings, tracing=tracing, http=downstream)
        async with app.router.lifespan_context(app):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://servicea") as client:
                yield client
