"""Prometheus scrape endpoint.

With STATS_BACKEND=prometheus, every counter and timer the middleware
emits shows up here under the "metric" label:

  planet_stats_events_total{metric="handler.received.web-1.Linux.Firefox"} 3.0

With STATS_BACKEND=statsd this still answers, but only with the
process-level collectors prometheus-client registers by default.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose all Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
