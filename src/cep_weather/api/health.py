"""
cep_weather.api.health

Liveness endpoint shared by both services.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP. No provider calls here.
    return {"status": "ok"}
