"""
cep_weather.clients

Outbound HTTP client package.

Responsibilities:
- Provider clients (ViaCEP, WeatherAPI) used by the weather service.
- The weather-service client used by the entry service.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on this boundary, not on httpx directly.
