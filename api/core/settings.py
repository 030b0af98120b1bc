"""
Environment-driven settings.

Values are read on demand so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

DEFAULT_PORT = 5000
DEFAULT_POOL_MIN_SIZE = 1
DEFAULT_POOL_MAX_SIZE = 5


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

    # asyncpg rejects libpq's sslmode parameter.
    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _database_url_from_pg_env() -> str:
    host = os.environ.get("PGHOST", "").strip()
    database = os.environ.get("PGDATABASE", "").strip()
    if not host or not database:
        return ""

    user = os.environ.get("PGUSER", "").strip()
    password = os.environ.get("PGPASSWORD", "")
    port = os.environ.get("PGPORT", "").strip() or "5432"

    auth = ""
    if user:
        auth = quote(user, safe="")
        if password:
            auth += ":" + quote(password, safe="")
        auth += "@"
    return f"postgresql://{auth}{host}:{port}/{quote(database, safe='')}"


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip() or _database_url_from_pg_env()
    if not url:
        raise RuntimeError("DATABASE_URL (or PGHOST/PGDATABASE) is not set.")
    return _sanitize_database_url(url)


def pool_min_size() -> int:
    return max(0, _env_int("DB_POOL_MIN_SIZE", DEFAULT_POOL_MIN_SIZE))


def pool_max_size() -> int:
    return max(1, _env_int("DB_POOL_MAX_SIZE", DEFAULT_POOL_MAX_SIZE))


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0"


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "*")
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["*"]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
