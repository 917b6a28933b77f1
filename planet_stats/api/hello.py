"""The greeting routes.

GET /       a link to the stats page
GET /stats  "Hello Planet!", counted and timed by instrument()
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.requests import Request
from starlette.responses import Response

from planet_stats.core.stats import STATS
from planet_stats.middleware.stats import instrument_with

router = APIRouter(tags=["hello"])


@router.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    return HTMLResponse('<a href="stats">check</a>')


@router.get("/stats", response_class=PlainTextResponse)
@instrument_with(STATS)
async def hello(request: Request) -> Response:
    return PlainTextResponse("Hello Planet!\n")
