"""
cep_weather.api.entry.__main__

Entrypoint for running the entry service via `python -m cep_weather.api.entry`.
"""

from __future__ import annotations

import uvicorn

from cep_weather.api.entry.app import create_app
from cep_weather.settings import get_entry_settings


def main() -> None:
    settings = get_entry_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# In docker-compose this process is published to clients; the weather service is
# only reachable from it through SERVICE_B_URL.
