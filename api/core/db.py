"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI opens it on startup, keeps it on
`app.state.db` and closes it on shutdown (see `api/main.py`). Route handlers
receive it through the `get_db` dependency, so tests can hand the app any
object with the same methods.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import asyncpg
from fastapi import Request

from . import settings
from .errors import StoreError

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)

# ids are SERIAL (int4) columns; anything outside this range cannot name a row.
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID


def affected_rows(status: str) -> int:
    """
    Parse the row count from a command status tag ("UPDATE 1", "INSERT 0 1").
    """
    tail = (status or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(
        self,
        dsn: str | None = None,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: int | None = None,
    ) -> None:
        self._dsn = dsn or settings.database_url()
        self._min_size = min_size if min_size is not None else settings.pool_min_size()
        self._max_size = max_size if max_size is not None else settings.pool_max_size()
        self._command_timeout = (
            command_timeout if command_timeout is not None else settings.command_timeout()
        )
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
        except _DRIVER_ERRORS as exc:
            raise StoreError(f"Could not connect to the database: {exc}") from exc
        logger.info("Connected to database pool (min=%d, max=%d)", self._min_size, self._max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise StoreError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool().fetchrow(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool().fetch(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a write statement (UPDATE/DELETE) and return the affected-row count.
        """
        try:
            status = await self.pool().execute(sql, *args)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return affected_rows(status)


def get_db(request: Request) -> Database:
    return request.app.state.db
