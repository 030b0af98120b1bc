"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI constructs one instance per
process on startup, stores it on `app.state.db` and closes it on shutdown
(see `api/main.py`). Repositories receive it through the `get_db`
dependency.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver exceptions never leave this module: they are translated into the
`core.errors` store taxonomy and re-raised without retrying.
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Any, Iterator

import asyncpg
from fastapi import Request

from . import settings
from .errors import ConnectivityError, ConstraintViolation, QueryError, StoreError

# SQLSTATE codes, besides class 08, meaning the store could not serve the call.
_CONNECTIVITY_CODES = {
    "53300",  # too_many_connections
    "57014",  # query_canceled (command timeout)
    "57P01",  # admin_shutdown
    "57P02",  # crash_shutdown
    "57P03",  # cannot_connect_now
}


def _classify(sqlstate: str | None) -> type[StoreError]:
    code = sqlstate or ""
    # 22 data exception, 23 integrity constraint violation
    if code[:2] in ("22", "23"):
        return ConstraintViolation
    if code[:2] == "08" or code in _CONNECTIVITY_CODES:
        return ConnectivityError
    return QueryError


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except asyncpg.PostgresError as exc:
        error_cls = _classify(exc.sqlstate)
        if error_cls is ConstraintViolation:
            raise ConstraintViolation(
                str(exc),
                sqlstate=exc.sqlstate,
                constraint=getattr(exc, "constraint_name", None),
            ) from exc
        raise error_cls(str(exc), sqlstate=exc.sqlstate) from exc
    except asyncpg.exceptions.ConnectionDoesNotExistError as exc:
        raise ConnectivityError(str(exc)) from exc
    except asyncpg.exceptions.InterfaceError as exc:
        raise QueryError(str(exc)) from exc
    except (OSError, asyncio.TimeoutError) as exc:
        raise ConnectivityError(str(exc) or exc.__class__.__name__) from exc


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    """
    Process-wide handle around one asyncpg pool.

    Each call acquires a connection, runs one statement and releases the
    connection again; no state is kept between calls.
    """

    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = settings.DEFAULT_POOL_MIN_SIZE,
        max_size: int = settings.DEFAULT_POOL_MAX_SIZE,
        command_timeout: float = 30,
    ) -> None:
        self._dsn = dsn
        self._min_size = min(min_size, max_size)
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_env(cls) -> "Database":
        return cls(
            settings.database_url(),
            min_size=settings.pool_min_size(),
            max_size=settings.pool_max_size(),
        )

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        with _translate_errors():
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )

    async def close(self) -> None:
        if self._pool is None:
            return None
        pool = self._pool
        self._pool = None
        await pool.close()

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise ConnectivityError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        with _translate_errors():
            row = await self.pool().fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        with _translate_errors():
            rows = await self.pool().fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DDL). No result returned.
        """
        with _translate_errors():
            await self.pool().execute(sql, *args)


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise ConnectivityError("Database is not configured on the application.")
    return db
