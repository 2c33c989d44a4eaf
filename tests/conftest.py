import re

import pytest
from fastapi.testclient import TestClient

from core.errors import StoreError
from main import create_app

_SELECT = re.compile(r"SELECT (?P<cols>.+) FROM (?P<table>\w+) ORDER BY id")
_INSERT = re.compile(r"INSERT INTO (?P<table>\w+) \((?P<cols>.+)\) VALUES \((?P<params>.+)\) RETURNING id")
_UPDATE = re.compile(r"UPDATE (?P<table>\w+) SET (?P<assignments>.+) WHERE id = \$(?P<id_param>\d+)")
_DELETE = re.compile(r"DELETE FROM (?P<table>\w+) WHERE id = \$1")


class FakeDatabase:
    """In-memory stand-in for `core.db.Database`.

    Understands exactly the statement shapes the repositories issue and keeps
    every (statement, args) pair in `statements` so tests can check binding.
    Setting `fail` makes every call raise StoreError, like a dropped connection.
    """

    def __init__(self):
        self.tables = {"users": {}, "products": {}}
        self._next_id = {"users": 1, "products": 1}
        self.statements = []
        self.fail = False

    def _record(self, sql, args):
        statement = " ".join(sql.split())
        self.statements.append((statement, args))
        if self.fail:
            raise StoreError("connection refused")
        return statement

    def rows(self, table):
        return [dict(row) for _, row in sorted(self.tables[table].items())]

    async def fetch_all(self, sql, *args):
        statement = self._record(sql, args)
        match = _SELECT.fullmatch(statement)
        assert match, f"unexpected query: {statement}"
        cols = [c.strip() for c in match["cols"].split(",")]
        return [{c: row[c] for c in cols} for row in self.rows(match["table"])]

    async def fetch_one(self, sql, *args):
        statement = self._record(sql, args)
        match = _INSERT.fullmatch(statement)
        assert match, f"unexpected query: {statement}"
        table = match["table"]
        cols = [c.strip() for c in match["cols"].split(",")]
        params = [int(p.strip().lstrip("$")) for p in match["params"].split(",")]

        new_id = self._next_id[table]
        self._next_id[table] += 1
        self.tables[table][new_id] = {"id": new_id, **{c: args[p - 1] for c, p in zip(cols, params)}}
        return {"id": new_id}

    async def execute(self, sql, *args):
        statement = self._record(sql, args)

        match = _UPDATE.fullmatch(statement)
        if match:
            row = self.tables[match["table"]].get(args[int(match["id_param"]) - 1])
            if row is None:
                return 0
            for assignment in match["assignments"].split(","):
                col, param = (part.strip() for part in assignment.split("="))
                row[col] = args[int(param.lstrip("$")) - 1]
            return 1

        match = _DELETE.fullmatch(statement)
        assert match, f"unexpected statement: {statement}"
        return 1 if self.tables[match["table"]].pop(args[0], None) is not None else 0


@pytest.fixture()
def store():
    return FakeDatabase()


@pytest.fixture()
def client(store):
    """TestClient serving from the in-memory store instead of a real pool."""
    app = create_app(db=store)
    with TestClient(app) as c:
        yield c
