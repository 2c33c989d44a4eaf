"""
Environment-driven settings.

Every value has a local default so the API starts against a developer
database without any configuration.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit


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


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    """
    Full DSN from DATABASE_URL, or one assembled from the DB_* variables.
    """
    url = os.environ.get("DATABASE_URL", "").strip()
    if url:
        return _sanitize_database_url(url)

    host = _env_str("DB_HOST", "localhost")
    port = _env_int("DB_PORT", 5432)
    user = quote(_env_str("DB_USER", "postgres"), safe="")
    password = quote(os.environ.get("DB_PASSWORD", ""), safe="")
    name = _env_str("DB_NAME", "test")

    credentials = f"{user}:{password}" if password else user
    return f"postgresql://{credentials}@{host}:{port}/{name}"


def pool_min_size() -> int:
    return _env_int("DB_POOL_MIN_SIZE", 1)


def pool_max_size() -> int:
    return _env_int("DB_POOL_MAX_SIZE", 5)


def command_timeout() -> int:
    return _env_int("DB_COMMAND_TIMEOUT", 30)


def http_host() -> str:
    return _env_str("HOST", "0.0.0.0")


def http_port() -> int:
    return _env_int("PORT", 5002)


def cors_origins() -> list[str]:
    raw = _env_str("CORS_ORIGINS", "http://localhost:3000")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()
