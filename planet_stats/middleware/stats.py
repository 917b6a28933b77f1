"""Request stats instrumentation: a counter and a timer per request.

For each request the instrumented handler:
  1. Starts a monotonic clock
  2. Builds the request's tags ONCE: browser + OS from the User-Agent
     header, host from the machine's short hostname
  3. Emits the "handler.received" counter (+1)
  4. Awaits the wrapped handler with the untouched request
  5. Emits the "handler.latency" timer with the elapsed seconds and the
     same tags from step 2

The tags are computed before the handler runs and reused for the timer,
so a request's counter and timer always land under the same encoded
name.

FUNCTION vs MIDDLEWARE CLASS
-----------------------------
instrument() is the real thing: a plain Handler → Handler transform.
Use it on a single route:

  @router.get("/stats")
  @instrument_with(STATS)
  async def hello(request: Request) -> Response: ...

StatsMiddleware applies the same transform to every route by wrapping
Starlette's call_next.  Pick one per route, not both, or the request is
counted twice.

FAILURES
---------
Nothing here can fail a request.  An unknown hostname just drops the
host tag; an unknown browser/OS becomes "no-browser"/"no-os" at encode
time.  If the handler itself raises, the exception goes straight up to
the server and no latency is recorded for that call.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from planet_stats.core.naming import StatsTags
from planet_stats.core.stats import StatsClient
from planet_stats.services.hostname import current_hostname, short_hostname
from planet_stats.services.user_agent import ClientAgent, parse_user_agent

logger = logging.getLogger(__name__)

RECEIVED_METRIC = "handler.received"
LATENCY_METRIC = "handler.latency"

Handler = Callable[[Request], Awaitable[Response]]
UserAgentParser = Callable[[str | None], ClientAgent]
HostnameResolver = Callable[[], str]


def request_tags(
    user_agent: str | None,
    *,
    ua_parser: UserAgentParser = parse_user_agent,
    hostname: HostnameResolver = current_hostname,
) -> StatsTags:
    """Derive the stats tags for one request."""
    agent = ua_parser(user_agent)
    try:
        host: str | None = short_hostname(hostname())
    except LookupError as exc:
        logger.debug("no host tag: %s", exc)
        host = None
    return StatsTags(os=agent.os, browser=agent.browser, host=host)


def instrument(
    handler: Handler,
    *,
    stats: StatsClient,
    ua_parser: UserAgentParser = parse_user_agent,
    hostname: HostnameResolver = current_hostname,
) -> Handler:
    """Wrap ``handler`` so each call emits a received counter and a latency timer."""

    @functools.wraps(handler)
    async def instrumented(request: Request) -> Response:
        start = time.monotonic()
        tags = request_tags(
            request.headers.get("user-agent"),
            ua_parser=ua_parser,
            hostname=hostname,
        )
        stats.inc_counter(RECEIVED_METRIC, tags, 1)

        response = await handler(request)

        duration = time.monotonic() - start
        stats.record_timer(LATENCY_METRIC, tags, duration)
        logger.debug(
            "%s %s took %.1fms",
            request.method,
            request.url.path,
            duration * 1000,
            extra={
                "metric": LATENCY_METRIC,
                "browser": tags.browser,
                "os": tags.os,
                "host": tags.host,
                "duration_ms": round(duration * 1000, 1),
            },
        )
        return response

    return instrumented


def instrument_with(
    stats: StatsClient,
    *,
    ua_parser: UserAgentParser = parse_user_agent,
    hostname: HostnameResolver = current_hostname,
) -> Callable[[Handler], Handler]:
    """Decorator form of instrument()."""
    return functools.partial(
        instrument, stats=stats, ua_parser=ua_parser, hostname=hostname
    )


class StatsMiddleware(BaseHTTPMiddleware):
    """Instrument every HTTP request except Prometheus scrapes."""

    def __init__(
        self,
        app: ASGIApp,
        stats: StatsClient,
        ua_parser: UserAgentParser = parse_user_agent,
        hostname: HostnameResolver = current_hostname,
        skip_paths: tuple[str, ...] = ("/metrics",),
    ) -> None:
        super().__init__(app)
        self._stats = stats
        self._ua_parser = ua_parser
        self._hostname = hostname
        self._skip_paths = skip_paths

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self._skip_paths:
            return await call_next(request)

        handler = instrument(
            call_next,
            stats=self._stats,
            ua_parser=self._ua_parser,
            hostname=self._hostname,
        )
        return await handler(request)
