"""Shared pytest fixtures: an in-memory stand-in for the Postgres pool."""

import re
from datetime import datetime, timedelta, timezone

import asyncpg
import pytest
from fastapi.testclient import TestClient

from core import db
from main import app

_BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)

_SELECT_BY_ID = re.compile(r"^SELECT \* FROM (\w+) WHERE (\w+) = \$1$")
_SELECT_ALL = re.compile(r"^SELECT \* FROM (\w+) ORDER BY (\w+) DESC$")
_DELETE = re.compile(r"^DELETE FROM (\w+) WHERE (\w+) = \$1 RETURNING (\w+)$")


def _flatten(sql):
    return " ".join(sql.split())


class FakeDatabase:
    """
    Understands exactly the statements the portfolio repository issues.

    Set `fail` to an exception instance to make every call raise it.
    """

    def __init__(self):
        self.tables = {"project": [], "skill": []}
        self.calls = []
        self.fail = None
        self._next_id = {"project": 1, "skill": 1}

    def _record(self, sql, args):
        self.calls.append((_flatten(sql), args))
        if self.fail is not None:
            raise self.fail
        return _flatten(sql)

    def seed_project(self, **fields):
        row = {
            "title": None,
            "status": None,
            "description": None,
            "url": "",
            "technologie": [],
            "demo": "",
            "github": "",
        }
        row.update(fields)
        return self._insert("project", "id_project", row)

    def seed_skill(self, **fields):
        row = {"name": None, "categorie": None, "level": 0}
        row.update(fields)
        return self._insert("skill", "id_skill", row)

    def _insert(self, table, id_key, row):
        row_id = self._next_id[table]
        self._next_id[table] += 1
        row = {id_key: row_id, **row}
        if table == "project":
            row.setdefault("created_at", _BASE_TIME + timedelta(minutes=row_id))
        self.tables[table].append(row)
        return dict(row)

    async def fetch_all(self, sql, *args):
        sql = self._record(sql, args)
        if sql == "SELECT 1":
            return [{"?column?": 1}]
        match = _SELECT_BY_ID.match(sql)
        if match:
            table, key = match.groups()
            return [dict(r) for r in self.tables[table] if r[key] == args[0]]
        match = _SELECT_ALL.match(sql)
        if match:
            table, column = match.groups()
            rows = sorted(self.tables[table], key=lambda r: r[column], reverse=True)
            return [dict(r) for r in rows]
        raise AssertionError(f"unexpected fetch_all: {sql}")

    async def fetch_one(self, sql, *args):
        sql = self._record(sql, args)
        if sql.startswith("INSERT INTO project"):
            title = args[0]
            if any(r["title"] == title for r in self.tables["project"]):
                raise asyncpg.UniqueViolationError(
                    'duplicate key value violates unique constraint "project_title_key"'
                )
            keys = ("title", "status", "description", "url", "technologie", "demo", "github")
            return self._insert("project", "id_project", dict(zip(keys, args)))
        if sql.startswith("INSERT INTO skill"):
            keys = ("name", "categorie", "level")
            return self._insert("skill", "id_skill", dict(zip(keys, args)))
        if sql.startswith("UPDATE project"):
            keys = ("title", "status", "description", "url", "technologie", "demo", "github")
            return self._update("project", "id_project", args[-1], dict(zip(keys, args)))
        if sql.startswith("UPDATE skill"):
            keys = ("name", "categorie", "level")
            return self._update("skill", "id_skill", args[-1], dict(zip(keys, args)))
        match = _DELETE.match(sql)
        if match:
            table, key, _ = match.groups()
            for row in self.tables[table]:
                if row[key] == args[0]:
                    self.tables[table].remove(row)
                    return {key: args[0]}
            return None
        raise AssertionError(f"unexpected fetch_one: {sql}")

    async def close(self):
        pass

    def _update(self, table, id_key, row_id, fields):
        for row in self.tables[table]:
            if row[id_key] == row_id:
                row.update(fields)
                return dict(row)
        return None


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def client(fake_db):
    app.dependency_overrides[db.get_db] = lambda: fake_db
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
