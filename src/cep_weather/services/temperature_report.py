"""
cep_weather.services.temperature_report

Weather-service orchestration: CEP -> city -> temperature -> report.

Responsibilities:
- Sequence the two provider lookups (location first, then weather).
- Collapse any non-NotFound lookup failure into INTERNAL.
- Build the TemperatureReport (derived F/K values).
"""

from __future__ import annotations

from cep_weather.clients.lookup import LookupClient
from cep_weather.errors import ErrorKind, PipelineError
from cep_weather.models import TemperatureReport


class TemperatureReportService:
    def __init__(self, *, client: LookupClient) -> None:
        self._client = client

    async def report_for(self, code: str) -> TemperatureReport:
        """
        `code` must already be validated; the API layer owns decoding/validation.
        """

        try:
            city = await self._client.resolve_location(code)
        except PipelineError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                raise
            raise PipelineError.internal(e.detail, cause=e.cause or e) from e

        try:
            sample = await self._client.fetch_weather(city)
        except PipelineError as e:
            # NotFound is meaningless for the weather step; everything is INTERNAL.
            raise PipelineError.internal(e.detail, cause=e.cause or e) from e

        return TemperatureReport(city=city, temp_c=sample.temperature_celsius)
