"""
cep_weather.api.weather

Weather service (second hop): resolves a CEP to a city and reports its temperature.
"""

# Package marker.
