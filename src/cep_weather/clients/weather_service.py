"""
cep_weather.clients.weather_service

HTTP client used by the entry service to call the weather service.

Responsibilities:
- POST the validated CEP to the weather service with trace context injected.
- Map the weather service's status codes back to local error kinds.
- Return the downstream body untouched on success.
"""

from __future__ import annotations

import httpx
import structlog

from cep_weather.errors import ErrorKind, PipelineError
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import HTTP_STATUS_CODE, Tracing

log = get_logger(__name__)

# Any other non-200 status collapses to INTERNAL.
_STATUS_TO_KIND: dict[int, ErrorKind] = {
    404: ErrorKind.NOT_FOUND,
    422: ErrorKind.UNPROCESSABLE_INPUT,
}


class WeatherServiceClient:
    def __init__(self, *, url: str, http: httpx.AsyncClient, tracing: Tracing) -> None:
        self._url = url
        self._http = http
        self._tracing = tracing

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        request_id = structlog.contextvars.get_contextvars().get("request_id")
        if request_id:
            headers["x-request-id"] = str(request_id)
        self._tracing.inject(headers)
        return headers

    async def temperature_for(self, code: str) -> bytes:
        with self._tracing.client_span("call_service_b") as span:
            span.set_attribute("cep", code)
            try:
                r = await self._http.post(self._url, json={"cep": code}, headers=self._headers())
            except httpx.HTTPError as e:
                log.error("downstream_error", error=str(e))
                raise PipelineError.internal("error calling weather service", cause=e) from e

            span.set_attribute(HTTP_STATUS_CODE, r.status_code)
            if r.status_code == 200:
                return r.content

            kind = _STATUS_TO_KIND.get(r.status_code, ErrorKind.INTERNAL)
            if kind is ErrorKind.INTERNAL:
                log.error("downstream_error", status_code=r.status_code)
            raise PipelineError(kind, f"weather service answered {r.status_code}")


# --- Module Notes -----------------------------------------------------------
# Error bodies from the weather service are never forwarded; each hop re-renders
# its own envelope from the mapped kind.
