"""
cep_weather.services

Service-layer package.

Responsibilities:
- Orchestrate the weather hop's provider calls (the entry hop is a single client call).
- Apply the hop's error-kind policy before the API layer renders a response.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake clients.
