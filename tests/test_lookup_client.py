"""
tests.test_lookup_client

Provider client behavior against faked ViaCEP / WeatherAPI responses.
"""

from __future__ import annotations

import httpx
import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind

from cep_weather.clients.lookup import LookupClient
from cep_weather.errors import ErrorKind, PipelineError
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import WeatherSettings
from fakes import KNOWN_CEP, KNOWN_CITY, FakeProviders


def _client(settings: WeatherSettings, http: httpx.AsyncClient, tracing: Tracing) -> LookupClient:
    return LookupClient(settings=settings, http=http, tracing=tracing)


@pytest.mark.asyncio
async def test_resolve_location_returns_locality(
    weather_settings: WeatherSettings,
    provider_http: httpx.AsyncClient,
    tracing: Tracing,
    providers: FakeProviders,
    span_exporter: InMemorySpanExporter,
) -> None:
    city = await _client(weather_settings, provider_http, tracing).resolve_location(KNOWN_CEP)

    assert city == KNOWN_CITY
    [request] = providers.requests
    assert str(request.url) == f"https://viacep.com.br/ws/{KNOWN_CEP}/json/"
    assert "traceparent" in request.headers

    [span] = span_exporter.get_finished_spans()
    assert span.name == "get_cep_info"
    assert span.kind is SpanKind.CLIENT
    assert span.attributes["http.status_code"] == 200


@pytest.mark.asyncio
async def test_resolve_location_erro_flag_is_not_found(
    weather_settings: WeatherSettings,
    provider_http: httpx.AsyncClient,
    tracing: Tracing,
) -> None:
    with pytest.raises(PipelineError) as exc_info:
        await _client(weather_settings, provider_http, tracing).resolve_location("99999999")
    assert exc_info.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize("failure", ["transport", "status"])
async def test_resolve_location_failures_are_internal(
    failure: str,
    weather_settings: WeatherSettings,
    provider_http: httpx.AsyncClient,
    tracing: Tracing,
    providers: FakeProviders,
) -> None:
    if failure == "transport":
        providers.transport_down = True
    else:
        providers.viacep_status = 400

    with pytest.raises(PipelineError) as exc_info:
        await _client(weather_settings, provider_http, tracing).resolve_location(KNOWN_CEP)
    assert exc_info.value.kind is ErrorKind.INTERNAL
    if failure == "transport":
        assert isinstance(exc_info.value.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_resolve_location_malformed_payload_is_internal(
    weather_settings: WeatherSettings,
    tracing: Tracing,
) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    async with httpx.AsyncClient(transport=transport) as http:
        with pytest.raises(PipelineError) as exc_info:
            await _client(weather_settings, http, tracing).resolve_location(KNOWN_CEP)
    assert exc_info.value.kind is ErrorKind.INTERNAL


@pytest.mark.asyncio
async def test_fetch_weather_escapes_city_and_sends_key(
    weather_settings: WeatherSettings,
    provider_http: httpx.AsyncClient,
    tracing: Tracing,
    providers: FakeProviders,
) -> None:
    sample = await _client(weather_settings, provider_http, tracing).fetch_weather(KNOWN_CITY)

    assert sample.temperature_celsius == 28.5
    [request] = providers.requests
    assert request.url.path == "/v1/current.json"
    assert request.url.params["key"] == "test-key"
    assert request.url.params["q"] == KNOWN_CITY
    assert request.url.params["aqi"] == "no"
    # Non-ASCII / space must not reach the wire unescaped.
    assert "S%C3%A3o" in str(request.url)
    assert " " not in str(request.url)


@pytest.mark.asyncio
async def test_fetch_weather_error_status_is_internal(
    weather_settings: WeatherSettings,
    provider_http: httpx.AsyncClient,
    tracing: Tracing,
    providers: FakeProviders,
    span_exporter: InMemorySpanExporter,
) -> None:
    providers.weather_status = 401

    with pytest.raises(PipelineError) as exc_info:
        await _client(weather_settings, provider_http, tracing).fetch_weather(KNOWN_CITY)
    assert exc_info.value.kind is ErrorKind.INTERNAL

    [span] = span_exporter.get_finished_spans()
    assert span.name == "get_weather_info"
    assert span.attributes["http.status_code"] == 401
    # Span still ended (exported) on the failure path, with the exception recorded.
    assert any(event.name == "exception" for event in span.events)


@pytest.mark.asyncio
async def test_fetch_weather_missing_temperature_is_internal(
    weather_settings: WeatherSettings,
    tracing: Tracing,
) -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, json={"location": {"name": "x"}, "current": {}})
    )
    async with httpx.AsyncClient(transport=transport) as http:
        with pytest.raises(PipelineError) as exc_info:
            await _client(weather_settings, http, tracing).fetch_weather("x")
    assert exc_info.value.kind is ErrorKind.INTERNAL
