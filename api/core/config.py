"""
Environment-backed settings.

Values are read at call time so tests and process managers can change the
environment without re-importing modules.
"""

from __future__ import annotations

import os

DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


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


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO")


def db_pool_min_size() -> int:
    return _env_int("DB_POOL_MIN_SIZE", 1)


def db_pool_max_size() -> int:
    return _env_int("DB_POOL_MAX_SIZE", 5)


def db_command_timeout_s() -> float:
    return _env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def moderation_api_url() -> str:
    return _env_str("MODERATION_API_URL", "https://api.apilayer.com").rstrip("/")


def moderation_api_key() -> str:
    return os.environ.get("MODERATION_API_KEY", "").strip()


def moderation_timeout_s() -> float:
    return _env_float("MODERATION_TIMEOUT_S", 10.0)


def moderation_max_retries() -> int:
    return max(0, _env_int("MODERATION_MAX_RETRIES", 3))


def moderation_backoff_factor_s() -> float:
    return _env_float("MODERATION_BACKOFF_FACTOR_S", 0.5)


def moderation_backoff_max_s() -> float:
    return _env_float("MODERATION_BACKOFF_MAX_S", 8.0)


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
