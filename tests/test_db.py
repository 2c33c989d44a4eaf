import asyncpg
import pytest

from core.db import Database, affected_rows
from core.errors import StoreError


class FakePool:
    def __init__(self, status="UPDATE 1", rows=None, error=None):
        self.status = status
        self.rows = rows or []
        self.error = error
        self.calls = []

    async def execute(self, sql, *args):
        self.calls.append((sql, args))
        if self.error:
            raise self.error
        return self.status

    async def fetch(self, sql, *args):
        self.calls.append((sql, args))
        if self.error:
            raise self.error
        return self.rows

    async def fetchrow(self, sql, *args):
        self.calls.append((sql, args))
        if self.error:
            raise self.error
        return self.rows[0] if self.rows else None


def _database_with(pool):
    db = Database("postgresql://localhost/test", min_size=1, max_size=1, command_timeout=1)
    db._pool = pool
    return db


@pytest.mark.parametrize(
    "status,expected",
    [("UPDATE 1", 1), ("DELETE 0", 0), ("INSERT 0 1", 1), ("UPDATE 12", 12), ("", 0), ("SELECT", 0)],
)
def test_affected_rows(status, expected):
    assert affected_rows(status) == expected


@pytest.mark.asyncio
async def test_execute_returns_affected_rows_and_passes_args():
    pool = FakePool(status="DELETE 2")
    db = _database_with(pool)

    assert await db.execute("DELETE FROM users WHERE id = $1", 5) == 2
    assert pool.calls == [("DELETE FROM users WHERE id = $1", (5,))]


@pytest.mark.asyncio
async def test_fetch_helpers_return_dicts():
    pool = FakePool(rows=[{"id": 1, "username": "a"}])
    db = _database_with(pool)

    assert await db.fetch_all("SELECT id, username FROM users") == [{"id": 1, "username": "a"}]
    assert await db.fetch_one("SELECT id, username FROM users") == {"id": 1, "username": "a"}


@pytest.mark.asyncio
async def test_fetch_one_returns_none_for_no_row():
    db = _database_with(FakePool(rows=[]))
    assert await db.fetch_one("SELECT 1") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [OSError("connection reset"), asyncpg.InterfaceError("pool is closing"), TimeoutError()],
)
async def test_driver_errors_become_store_errors(error):
    db = _database_with(FakePool(error=error))

    with pytest.raises(StoreError):
        await db.execute("DELETE FROM users WHERE id = $1", 1)
    with pytest.raises(StoreError):
        await db.fetch_all("SELECT id FROM users")


@pytest.mark.asyncio
async def test_unconnected_database_raises_store_error():
    db = Database("postgresql://localhost/test")
    with pytest.raises(StoreError):
        await db.fetch_all("SELECT id FROM users")


@pytest.mark.asyncio
async def test_connect_failure_raises_store_error(monkeypatch):
    async def _refuse(**kwargs):
        raise OSError("connection refused")

    monkeypatch.setattr(asyncpg, "create_pool", _refuse)

    db = Database("postgresql://localhost/test")
    with pytest.raises(StoreError):
        await db.connect()
