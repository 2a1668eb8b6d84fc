"""
cep_weather.validation

Postal code (CEP) format check shared by both services.
"""

from __future__ import annotations

import re

# ASCII only: `\d` would also accept other Unicode decimal digits.
_CEP_PATTERN = re.compile(r"[0-9]{8}")


def validate(code: str) -> bool:
    return _CEP_PATTERN.fullmatch(code) is not None
