from __future__ import annotations

import pytest

from planet_stats.core.config import AppEnv, Settings, load_settings

# ---- valid values ----


def test_load_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "APP_ENV",
        "LOG_LEVEL",
        "LOG_JSON",
        "PORT",
        "STATS_BACKEND",
        "STATSD_HOST",
        "STATSD_PORT",
        "STATSD_PREFIX",
    ):
        monkeypatch.delenv(var, raising=False)
    settings = load_settings()
    assert settings.app_env == "dev"
    assert settings.log_level == "info"
    assert settings.log_json is False
    assert settings.port == 8080
    assert settings.stats_backend == "prometheus"
    assert (settings.statsd_host, settings.statsd_port) == ("localhost", 8125)
    assert settings.statsd_prefix == ""


def test_load_settings_respects_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("LOG_JSON", "true")
    monkeypatch.setenv("STATS_BACKEND", "statsd")
    monkeypatch.setenv("STATSD_HOST", "stats.internal")
    monkeypatch.setenv("STATSD_PORT", "9125")
    monkeypatch.setenv("STATSD_PREFIX", "planet.")
    settings = load_settings()
    assert settings.app_env == "prod"
    assert settings.log_level == "error"
    assert settings.log_json is True
    assert settings.stats_backend == "statsd"
    assert settings.statsd_host == "stats.internal"
    assert settings.statsd_port == 9125
    assert settings.statsd_prefix == "planet."


def test_load_settings_normalizes_case(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "PROD")
    monkeypatch.setenv("STATS_BACKEND", "StatsD")
    settings = load_settings()
    assert settings.app_env == "prod"
    assert settings.stats_backend == "statsd"


def test_load_settings_strips_whitespace(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "  test  ")
    monkeypatch.setenv("PORT", " 9000 ")
    settings = load_settings()
    assert settings.app_env == "test"
    assert settings.port == 9000


# ---- invalid values ----


def test_load_settings_rejects_invalid_app_env(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("APP_ENV", "staging")
    with pytest.raises(ValueError, match="APP_ENV must be dev|test|prod"):
        load_settings()


def test_load_settings_rejects_invalid_log_level(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    with pytest.raises(ValueError, match="LOG_LEVEL must be"):
        load_settings()


def test_load_settings_rejects_invalid_log_json(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("LOG_JSON", "maybe")
    with pytest.raises(ValueError, match="LOG_JSON must be"):
        load_settings()


def test_load_settings_rejects_unknown_backend(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("STATS_BACKEND", "graphite")
    with pytest.raises(ValueError, match="STATS_BACKEND must be"):
        load_settings()


@pytest.mark.parametrize("var", ["PORT", "STATSD_PORT"])
def test_load_settings_rejects_non_integer_ports(
    monkeypatch: pytest.MonkeyPatch, var: str
) -> None:
    monkeypatch.setenv(var, "eighty")
    with pytest.raises(ValueError, match=f"{var} must be an integer"):
        load_settings()


# ---- Settings properties ----


def _make_settings(app_env: AppEnv = "dev") -> Settings:
    return Settings(  # type: ignore[arg-type]
        app_env=app_env,
        log_level="info",
        log_json=False,
        port=8080,
        stats_backend="prometheus",
        statsd_host="localhost",
        statsd_port=8125,
        statsd_prefix="",
    )


def test_settings_env_flags() -> None:
    assert _make_settings("dev").is_dev is True
    assert _make_settings("test").is_test is True
    assert _make_settings("prod").is_prod is True
    assert _make_settings("prod").is_dev is False


def test_settings_is_frozen() -> None:
    s = _make_settings()
    with pytest.raises(AttributeError):
        s.app_env = "prod"  # type: ignore[misc]
