from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]
StatsBackend = Literal["prometheus", "statsd"]

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


def _getint(name: str, default: str) -> int:
    raw = _getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    stats_backend: StatsBackend
    statsd_host: str
    statsd_port: int
    statsd_prefix: str

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()
    backend_raw = _getenv("STATS_BACKEND", "prometheus").lower()

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if log_json_raw not in _TRUE_WORDS + _FALSE_WORDS:
        raise ValueError(f"LOG_JSON must be true|false (got {log_json_raw!r})")

    if backend_raw not in ("prometheus", "statsd"):
        raise ValueError(
            f"STATS_BACKEND must be prometheus|statsd (got {backend_raw!r})"
        )

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json_raw in _TRUE_WORDS,
        port=_getint("PORT", "8080"),
        stats_backend=backend_raw,
        statsd_host=_getenv("STATSD_HOST", "localhost"),
        statsd_port=_getint("STATSD_PORT", "8125"),
        statsd_prefix=_getenv("STATSD_PREFIX", ""),
    )


SETTINGS = load_settings()
