"""Stats clients: where encoded metric names end up.

The middleware only knows two operations, both taking a base name and a
set of tags:

  inc_counter(name, tags, delta)    : "this happened N more times"
  record_timer(name, tags, duration): "this took N seconds"

Each client folds the tags into the name with encode_name() and hands
the result to a real backend.  Two backends ship:

  PrometheusStatsClient: in-process prometheus-client metrics.  The
    encoded name becomes the value of a "metric" label, because
    Prometheus metric names can't contain dots or dashes.  Scraped via
    GET /metrics.

  StatsdStatsClient: one UDP datagram per emission in the plain StatsD
    line format ("name:1|c", "name:12.5|ms").  UDP is fire-and-forget:
    if the daemon is down, the packet is simply lost.

Neither client ever raises into the request path.  A failed emission is
logged and dropped.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Mapping
from typing import Protocol

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

from planet_stats.core.config import SETTINGS, Settings
from planet_stats.core.naming import StatsTags, encode_name

logger = logging.getLogger(__name__)

Tags = StatsTags | Mapping[str, str] | None


class StatsClient(Protocol):
    def inc_counter(self, name: str, tags: Tags, delta: int = 1) -> None: ...

    def record_timer(self, name: str, tags: Tags, duration: float) -> None: ...


# Same spread as a typical API: 5ms health checks up to multi-second outliers.
_TIMER_BUCKETS = [0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]


def _metric_families(registry: CollectorRegistry) -> tuple[Counter, Histogram]:
    counter = Counter(
        "planet_stats_events",
        "Counter emissions by encoded metric name",
        ["metric"],
        registry=registry,
    )
    timer = Histogram(
        "planet_stats_timer_seconds",
        "Timer emissions by encoded metric name",
        ["metric"],
        buckets=_TIMER_BUCKETS,
        registry=registry,
    )
    return counter, timer


# Registered once on the global registry; every default client shares them.
STATS_EVENTS, STATS_TIMER = _metric_families(REGISTRY)


class PrometheusStatsClient:
    """Record emissions into prometheus-client metric families.

    Without a registry the client writes to the process-wide families
    above, so any number of default clients can coexist.  Pass a fresh
    CollectorRegistry to get an isolated set.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        if registry is None:
            self._counter, self._timer = STATS_EVENTS, STATS_TIMER
        else:
            self._counter, self._timer = _metric_families(registry)

    def inc_counter(self, name: str, tags: Tags, delta: int = 1) -> None:
        metric = encode_name(name, tags)
        try:
            self._counter.labels(metric=metric).inc(delta)
        except ValueError:
            # prometheus-client rejects negative increments
            logger.warning("dropped counter %s delta=%r", metric, delta)

    def record_timer(self, name: str, tags: Tags, duration: float) -> None:
        metric = encode_name(name, tags)
        self._timer.labels(metric=metric).observe(duration)


class StatsdStatsClient:
    """Send emissions to a StatsD daemon over UDP."""

    def __init__(self, host: str, port: int, prefix: str = "") -> None:
        self._addr = (host, port)
        self._prefix = prefix
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def inc_counter(self, name: str, tags: Tags, delta: int = 1) -> None:
        self._send(f"{self._prefix}{encode_name(name, tags)}:{delta}|c")

    def record_timer(self, name: str, tags: Tags, duration: float) -> None:
        ms = duration * 1000
        self._send(f"{self._prefix}{encode_name(name, tags)}:{ms:.3f}|ms")

    def close(self) -> None:
        self._sock.close()

    def _send(self, line: str) -> None:
        try:
            self._sock.sendto(line.encode("utf-8"), self._addr)
        except OSError:
            logger.warning("statsd send failed addr=%s:%d line=%s", *self._addr, line)


def build_stats_client(settings: Settings) -> StatsClient:
    """Pick the stats backend configured by STATS_BACKEND."""
    if settings.stats_backend == "statsd":
        logger.info(
            "stats backend: statsd at %s:%d",
            settings.statsd_host,
            settings.statsd_port,
        )
        return StatsdStatsClient(
            settings.statsd_host,
            settings.statsd_port,
            prefix=settings.statsd_prefix,
        )
    logger.info("stats backend: prometheus")
    return PrometheusStatsClient()


STATS = build_stats_client(SETTINGS)
