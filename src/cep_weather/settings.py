"""
cep_weather.settings

Central configuration models (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for both services.
- Hide secrets from repr/logging (e.g., weather API key).
- Offer cached settings instances for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Shared by both services:
    - Strict env-driven configuration
    - Defaults match the docker-compose topology (collector + service hostnames)
    """

    # No prefix: deployments already export PORT / OTEL_COLLECTOR_URL / ... verbatim.
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    # APP_ENV, not ENV: POSIX shells commonly export ENV.
    app_env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "cep-weather"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    port: int = 8080

    # Tracing
    otel_collector_url: str = "otel-collector:4317"
    otel_exporter_enabled: bool = True
    tracer_shutdown_timeout_s: float = 5.0

    # Outbound HTTP (shared connection pool per process). Caps each call on top of
    # client-disconnect cancellation; httpx alone would apply 5 s.
    http_timeout_s: float = 10.0


class EntrySettings(Settings):
    service_name: str = "service-a"
    port: int = 8080

    service_b_url: str = "http://serviceb:8081/weather"


class WeatherSettings(Settings):
    service_name: str = "service-b"
    port: int = 8081

    weather_api_key: str = Field(default="", repr=False)
    viacep_base_url: str = "https://viacep.com.br"
    weather_api_base_url: str = "https://api.weatherapi.com"


@lru_cache(maxsize=1)
def get_entry_settings() -> EntrySettings:
    # Cache avoids re-parsing env vars for each request dependency.
    return EntrySettings()


@lru_cache(maxsize=1)
def get_weather_settings() -> WeatherSettings:
    return WeatherSettings()


# --- Module Notes -----------------------------------------------------------
# Each process only ever loads one of the two subclasses; the shared base keeps
# logging/tracing knobs identical across the two hops.
