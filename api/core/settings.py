"""
Process configuration, read from environment variables.

A `.env` file in the working directory is loaded by `api/main.py`
before settings are read.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


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


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _sanitize_database_url(url: str) -> str:
    # TLS is configured on the pool itself; a libpq sslmode would fight it.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip() or os.environ.get("BDD", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str
    database_ssl: bool = True
    pool_min_size: int = 0
    pool_max_size: int = 10
    command_timeout: float = 30.0
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        pool_max_size = max(1, _env_int("DB_POOL_MAX", 10))
        pool_min_size = min(max(0, _env_int("DB_POOL_MIN", 0)), pool_max_size)
        return cls(
            database_url=database_url(),
            database_ssl=_env_str("DATABASE_SSL", "require").lower() != "disable",
            pool_min_size=pool_min_size,
            pool_max_size=pool_max_size,
            command_timeout=_env_float("DB_COMMAND_TIMEOUT", 30.0),
            host=_env_str("HOST", "0.0.0.0"),
            port=_env_int("PORT", 3000),
            log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        )
