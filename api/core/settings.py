"""
Environment-driven settings.

Values are read on every call so tests can patch `os.environ`.
"""

from __future__ import annotations

import logging
import os

DEFAULT_PORT = 3000
DEFAULT_CORS_ORIGINS = (
    "http://localhost:4200",
    "http://localhost:3000",
    "https://Lucas-Josephh.github.io",
)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def app_env() -> str:
    return os.environ.get("APP_ENV", "development").strip().lower() or "development"


def is_production() -> bool:
    return app_env() == "production"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def pool_min_size() -> int:
    # 0 keeps asyncpg from opening a connection when the pool is created.
    return max(0, _env_int("DB_POOL_MIN_SIZE", 0))


def pool_max_size() -> int:
    # One connection per instance: the service mostly runs on serverless hosts.
    return max(1, _env_int("DB_POOL_MAX_SIZE", 1))


def connect_timeout_s() -> float:
    return _env_float("DB_CONNECT_TIMEOUT", 10.0)


def db_ssl() -> str | bool:
    """
    asyncpg `ssl=` argument. "require" encrypts without verifying the server
    certificate; "disable" (or "false"/"off") connects in plain text.
    """
    raw = os.environ.get("DB_SSL", "require").strip().lower() or "require"
    if raw in {"disable", "false", "off", "0"}:
        return False
    return raw


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
