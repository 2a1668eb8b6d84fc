"""
cep_weather.api

API package for the entry and weather services.

Responsibilities:
- Shared FastAPI app factory, dependencies and error rendering.
- One subpackage per service (`entry`, `weather`) with routes and entrypoint.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: decoding + validation + delegation to services.
