"""
cep_weather.models

Request/response and provider payload models (Pydantic v2).

Responsibilities:
- Decode the `{"cep": ...}` request body shared by both services.
- Describe the subset of ViaCEP / WeatherAPI payloads the pipeline reads.
- Serialize the final temperature report with derived F/K values.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, computed_field

from cep_weather.errors import PipelineError
from cep_weather.temperature import celsius_to_fahrenheit, celsius_to_kelvin
from cep_weather.validation import validate


class CepRequest(BaseModel):
    # Missing `cep` decodes to "" and is rejected by validation, not decoding.
    cep: StrictStr = ""


class ErrorResponse(BaseModel):
    message: str


class ViaCepResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    localidade: str = ""
    # ViaCEP answers unknown codes with 200 + {"erro": true} (or "true").
    erro: bool = False


class WeatherApiCurrent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    temp_c: float


class WeatherApiResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: WeatherApiCurrent


class WeatherSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature_celsius: float


class TemperatureReport(BaseModel):
    """
    Final response entity.

    Only the Celsius reading is stored; Fahrenheit and Kelvin are computed on
    serialization so they can never drift from it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    temp_c: float = Field(alias="temp_C")

    @computed_field(alias="temp_F")  # type: ignore[prop-decorator]
    @property
    def temp_f(self) -> float:
        return celsius_to_fahrenheit(self.temp_c)

    @computed_field(alias="temp_K")  # type: ignore[prop-decorator]
    @property
    def temp_k(self) -> float:
        return celsius_to_kelvin(self.temp_c)

    def to_json_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


def parse_cep_request(raw: bytes) -> str:
    """
    Decode and validate a request body, returning the accepted code.

    Both a decode failure and an invalid code map to UNPROCESSABLE_INPUT.
    """

    try:
        body = CepRequest.model_validate_json(raw or b"null")
    except ValidationError as e:
        raise PipelineError.unprocessable(
            f"undecodable request body: {e.error_count()} error(s)"
        ) from e
    if not validate(body.cep):
        raise PipelineError.unprocessable(f"invalid cep format: {body.cep!r}")
    return body.cep


# --- Module Notes -----------------------------------------------------------
# Provider models ignore unknown fields; only `localidade`/`erro` and
# `current.temp_c` drive behavior.
