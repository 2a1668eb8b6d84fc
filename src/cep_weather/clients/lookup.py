"""
cep_weather.clients.lookup

HTTP client boundary for the two third-party providers used by the weather service.

Responsibilities:
- Resolve a CEP to a city name via ViaCEP.
- Fetch the current temperature for a city via WeatherAPI.
- Translate transport/status/decode failures into `PipelineError` kinds.
- Run each call in its own CLIENT span with trace headers injected.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from cep_weather.errors import PipelineError
from cep_weather.models import ViaCepResponse, WeatherApiResponse, WeatherSample
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import HTTP_STATUS_CODE, Tracing
from cep_weather.settings import WeatherSettings

log = get_logger(__name__)


class LookupClient:
    """
    Provider boundary:
    - The weather service talks to ViaCEP / WeatherAPI only through this class.
    - The shared `httpx.AsyncClient` (connection pool) is owned by the app lifespan.
    """

    def __init__(
        self,
        *,
        settings: WeatherSettings,
        http: httpx.AsyncClient,
        tracing: Tracing,
    ) -> None:
        self._settings = settings
        self._http = http
        self._tracing = tracing

    def _trace_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        self._tracing.inject(headers)
        return headers

    async def resolve_location(self, code: str) -> str:
        with self._tracing.client_span("get_cep_info") as span:
            span.set_attribute("cep", code)
            url = f"{self._settings.viacep_base_url.rstrip('/')}/ws/{code}/json/"
            try:
                r = await self._http.get(url, headers=self._trace_headers())
            except httpx.HTTPError as e:
                log.warning("viacep_error", error=str(e))
                raise PipelineError.internal("error calling ViaCEP", cause=e) from e

            span.set_attribute(HTTP_STATUS_CODE, r.status_code)
            if not r.is_success:
                log.warning("viacep_error", status_code=r.status_code)
                raise PipelineError.internal(f"unexpected status code from ViaCEP: {r.status_code}")

            try:
                payload = ViaCepResponse.model_validate_json(r.content)
            except ValidationError as e:
                log.warning("viacep_error", error="undecodable response")
                raise PipelineError.internal("error decoding ViaCEP response", cause=e) from e

            if payload.erro:
                raise PipelineError.not_found(f"cep {code} not found")

            span.set_attribute("city", payload.localidade)
            return payload.localidade

    async def fetch_weather(self, city: str) -> WeatherSample:
        with self._tracing.client_span("get_weather_info") as span:
            span.set_attribute("city", city)
            url = f"{self._settings.weather_api_base_url.rstrip('/')}/v1/current.json"
            # httpx URL-escapes query params (spaces/accents in city names).
            params = {"key": self._settings.weather_api_key, "q": city, "aqi": "no"}
            try:
                r = await self._http.get(url, params=params, headers=self._trace_headers())
            except httpx.HTTPError as e:
                log.error("weather_api_error", error=str(e))
                raise PipelineError.internal("error calling Weather API", cause=e) from e

            span.set_attribute(HTTP_STATUS_CODE, r.status_code)
            if not r.is_success:
                log.error("weather_api_error", status_code=r.status_code, body=r.text)
                raise PipelineError.internal(
                    f"unexpected status code from Weather API: {r.status_code}"
                )

            try:
                payload = WeatherApiResponse.model_validate_json(r.content)
            except ValidationError as e:
                log.error("weather_api_error", error="undecodable response", body=r.text)
                raise PipelineError.internal("error decoding Weather API response", cause=e) from e

            return WeatherSample(temperature_celsius=payload.current.temp_c)


# --- Module Notes -----------------------------------------------------------
# A PipelineError raised inside `client_span` is recorded on that span before it
# propagates, so provider failures show up on the leaf spans of the trace.
