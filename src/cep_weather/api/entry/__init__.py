"""
cep_weather.api.entry

Entry service (first hop): validates a CEP and forwards it to the weather service.
"""

# Package marker.
