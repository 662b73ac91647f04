"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI builds it on startup, keeps it on
`app.state.db` and closes it on shutdown. The pool is only created on the
first query, so a missing or unreachable database never blocks startup and
surfaces through `/health` instead (see `api/main.py`). Route handlers
receive it through the `get_db` dependency so tests can substitute a fake.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from . import settings


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def _create_pool() -> asyncpg.Pool:
    return await asyncpg.create_pool(
        dsn=database_url(),
        min_size=min(settings.pool_min_size(), settings.pool_max_size()),
        max_size=settings.pool_max_size(),
        timeout=settings.connect_timeout_s(),
        ssl=settings.db_ssl(),
    )


class Database:
    def __init__(self, pool: asyncpg.Pool | None = None) -> None:
        self._pool = pool
        self._pool_lock = asyncio.Lock()

    async def _acquire_pool(self) -> asyncpg.Pool:
        # A failed creation leaves `_pool` unset; the next query tries again.
        async with self._pool_lock:
            if self._pool is None:
                self._pool = await _create_pool()
        return self._pool

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        pool = await self._acquire_pool()
        row = await pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        pool = await self._acquire_pool()
        rows = await pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None


def create_database() -> Database:
    return Database()


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database is not initialized. Create it in the app lifespan.")
    return db
