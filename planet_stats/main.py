from __future__ import annotations

import logging

from fastapi import FastAPI

from planet_stats.api.health import router as health_router
from planet_stats.api.hello import router as hello_router
from planet_stats.api.metrics_endpoint import router as metrics_router
from planet_stats.core.config import SETTINGS
from planet_stats.core.logging import setup_logging

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

# Only GET /stats is instrumented (route-level, see api/hello.py).  To
# count every route instead, drop the route decorator and add
# StatsMiddleware here.
app = FastAPI(
    title="planet-stats",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(hello_router)

logger.info(
    "planet-stats started  env=%s log_level=%s port=%d stats_backend=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    SETTINGS.stats_backend,
)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=SETTINGS.port)
