"""
cep_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
- OpenTelemetry tracing (span lifecycle, cross-service context propagation).
"""

# Package marker.
