"""
Environment-backed settings.

Each setting is a small function so tests can change the environment
(monkeypatch.setenv) without reloading modules.
"""

from __future__ import annotations

import os

STORE_BACKENDS = ("postgres", "memory")

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def store_backend() -> str:
    backend = _env_str("PEOPLE_STORE", "postgres").lower()
    if backend not in STORE_BACKENDS:
        raise RuntimeError(f"PEOPLE_STORE must be one of {list(STORE_BACKENDS)}, got '{backend}'.")
    return backend


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip()


def pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), pool_min_size(), 1)


def command_timeout_s() -> int:
    return _env_int("DB_COMMAND_TIMEOUT_S", 30)


def auto_create_schema() -> bool:
    return _env_bool("PEOPLE_AUTO_CREATE_SCHEMA", True)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def host() -> str:
    return _env_str("HOST", "0.0.0.0")


def port() -> int:
    return _env_int("PORT", 3000)
