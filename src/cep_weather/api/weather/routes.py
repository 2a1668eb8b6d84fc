"""
cep_weather.api.weather.routes

`POST /weather`: CEP -> temperature report.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse, Response

from cep_weather.api.deps import http_from_app, tracing_from_app
from cep_weather.api.errors import handle_cep_request
from cep_weather.clients.lookup import LookupClient
from cep_weather.observability.tracing import Tracing
from cep_weather.services.temperature_report import TemperatureReportService
from cep_weather.settings import WeatherSettings

router = APIRouter(tags=["weather"])


def weather_settings_from_app(request: Request) -> WeatherSettings:
    return request.app.state.settings  # type: ignore[attr-defined]


def temperature_report_service(
    settings: WeatherSettings = Depends(weather_settings_from_app),
    tracing: Tracing = Depends(tracing_from_app),
    http: httpx.AsyncClient = Depends(http_from_app),
) -> TemperatureReportService:
    client = LookupClient(settings=settings, http=http, tracing=tracing)
    return TemperatureReportService(client=client)


@router.post("/weather")
async def weather(
    request: Request,
    tracing: Tracing = Depends(tracing_from_app),
    service: TemperatureReportService = Depends(temperature_report_service),
) -> Response:
    async def _report(code: str) -> Response:
        report = await service.report_for(code)
        return JSONResponse(report.to_json_dict())

    return await handle_cep_request(
        request, tracing=tracing, span_name="handle_weather_request", work=_report
    )
