from __future__ import annotations

from fastapi import APIRouter

from planet_stats.core.config import SETTINGS

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness probe: if the process can answer, it's alive."""
    return {"status": "ok", "stats_backend": SETTINGS.stats_backend}
