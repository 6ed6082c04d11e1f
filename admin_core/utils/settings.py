"""Runtime settings sourced from the environment.

The persistence backend is chosen once per process from ``DATABASE_TYPE``;
everything that depends on it reads the cached ``Settings`` instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Mapping, Optional


class DatabaseType(str, Enum):
    POSTGRES = "postgres"
    MONGODB = "mongodb"


@dataclass(frozen=True)
class Settings:
    database_type: DatabaseType
    database_url: Optional[str] = None
    mongodb_uri: Optional[str] = None
    mongodb_database: str = "equity_admin"
    mongodb_transactions: bool = False
    cache_ttl_seconds: int = 300
    cache_backend: str = "memory"
    redis_url: Optional[str] = None
    log_level: str = "INFO"


_CACHE_BACKENDS = ("memory", "redis")

_POSTGRES_PARTS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _normalize_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_database_url(environ: Mapping[str, str]) -> str:
    # An explicit DATABASE_URL always wins over the composed form
    if environ.get("DATABASE_URL"):
        return environ["DATABASE_URL"]

    missing = [name for name in _POSTGRES_PARTS if not environ.get(name)]
    if missing:
        raise ValueError(
            "DATABASE_URL is required when DATABASE_TYPE is postgres "
            f"(or set all of: {', '.join(missing)})"
        )
    return (
        f"postgresql://{environ['POSTGRES_USER']}:{environ['POSTGRES_PASSWORD']}"
        f"@{environ['POSTGRES_HOST']}:{environ['POSTGRES_PORT']}/{environ['POSTGRES_DB']}"
    )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``environ`` (defaults to ``os.environ``).

    Raises ``ValueError`` when ``DATABASE_TYPE`` is unknown or the connection
    string required by the chosen backend is missing.
    """
    env = os.environ if environ is None else environ
    raw_type = (env.get("DATABASE_TYPE") or DatabaseType.POSTGRES.value).strip().lower()
    try:
        database_type = DatabaseType(raw_type)
    except ValueError:
        valid = ", ".join(t.value for t in DatabaseType)
        raise ValueError(f"Invalid DATABASE_TYPE: {raw_type!r}. Must be one of: {valid}") from None

    database_url = None
    mongodb_uri = None
    if database_type is DatabaseType.POSTGRES:
        database_url = get_database_url(env)
    else:
        mongodb_uri = env.get("MONGODB_URI")
        if not mongodb_uri:
            raise ValueError("MONGODB_URI is required when DATABASE_TYPE is mongodb")

    cache_backend = (env.get("CACHE_BACKEND") or "memory").strip().lower()
    if cache_backend not in _CACHE_BACKENDS:
        raise ValueError(f"Invalid CACHE_BACKEND: {cache_backend!r}. Must be one of: {', '.join(_CACHE_BACKENDS)}")
    redis_url = env.get("REDIS_URL")
    if cache_backend == "redis" and not redis_url:
        raise ValueError("REDIS_URL is required when CACHE_BACKEND is redis")

    return Settings(
        database_type=database_type,
        database_url=database_url,
        mongodb_uri=mongodb_uri,
        mongodb_database=env.get("MONGODB_DATABASE") or "equity_admin",
        mongodb_transactions=_normalize_bool(env.get("MONGODB_TRANSACTIONS")),
        cache_ttl_seconds=_normalize_int(env.get("CACHE_TTL_SECONDS"), 300),
        cache_backend=cache_backend,
        redis_url=redis_url,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings for this process."""
    return load_settings()


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
