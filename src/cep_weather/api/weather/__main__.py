"""
cep_weather.api.weather.__main__

Entrypoint for running the weather service via `python -m cep_weather.api.weather`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from cep_weather.api.weather.app import create_app
from cep_weather.settings import get_weather_settings


def main() -> None:
    settings = get_weather_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
