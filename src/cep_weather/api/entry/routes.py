"""
cep_weather.api.entry.routes

`POST /cep`: validate, forward to the weather service, relay its answer.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from cep_weather.api.deps import http_from_app, tracing_from_app
from cep_weather.api.errors import handle_cep_request
from cep_weather.clients.weather_service import WeatherServiceClient
from cep_weather.observability.tracing import Tracing
from cep_weather.settings import EntrySettings

router = APIRouter(tags=["cep"])


def entry_settings_from_app(request: Request) -> EntrySettings:
    return request.app.state.settings  # type: ignore[attr-defined]


def weather_service_client(
    settings: EntrySettings = Depends(entry_settings_from_app),
    tracing: Tracing = Depends(tracing_from_app),
    http: httpx.AsyncClient = Depends(http_from_app),
) -> WeatherServiceClient:
    return WeatherServiceClient(url=settings.service_b_url, http=http, tracing=tracing)


@router.post("/cep")
async def cep(
    request: Request,
    tracing: Tracing = Depends(tracing_from_app),
    client: WeatherServiceClient = Depends(weather_service_client),
) -> Response:
    async def _forward(code: str) -> Response:
        # Errors arrive already mapped to local kinds by the client.
        body = await client.temperature_for(code)
        # Downstream body is relayed byte-for-byte, no re-serialization.
        return Response(content=body, status_code=200, media_type="application/json")

    return await handle_cep_request(
        request, tracing=tracing, span_name="handle_cep_request", work=_forward
    )
