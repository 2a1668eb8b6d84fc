"""
cep_weather.temperature

Celsius conversions used to build temperature reports.
"""

from __future__ import annotations


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def celsius_to_kelvin(celsius: float) -> float:
    # Integer offset (273, not 273.15): published response contract.
    return celsius + 273
