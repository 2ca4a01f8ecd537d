"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Every helper wraps driver failures in `StoreError` so the HTTP layer can map
them to one response instead of leaking asyncpg exceptions.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings

_pool: asyncpg.Pool | None = None

# asyncio.TimeoutError is a separate class before Python 3.11.
_STORE_FAILURES = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncio.TimeoutError,
    TimeoutError,
    OSError,
)


class StoreError(RuntimeError):
    pass


@dataclass(frozen=True)
class QueryResult:
    """
    Result of one statement: returned rows plus the affected row count.

    Mirrors the `{rows, rowCount, command}` shape clients of the API see.
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    command: str = ""

    def as_envelope(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "rowCount": self.row_count,
            "rows": self.rows,
        }


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = settings.database_url()
    if not url:
        raise StoreError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    try:
        _pool = await asyncpg.create_pool(
            dsn=database_url(),
            min_size=settings.pool_min_size(),
            max_size=settings.pool_max_size(),
            command_timeout=settings.command_timeout_s(),
        )
    except _STORE_FAILURES as exc:
        raise StoreError(f"Could not connect to the database: {exc}") from exc


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise StoreError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def parse_status(status: str) -> tuple[str, int]:
    """
    Split an asyncpg status tag ("INSERT 0 1", "UPDATE 3", "SELECT 2")
    into the command name and the affected row count.
    """
    parts = (status or "").split()
    if not parts:
        return "", 0
    command = parts[0].upper()
    try:
        count = int(parts[-1])
    except ValueError:
        count = 0
    return command, count


async def query(sql: str, *args: Any) -> QueryResult:
    """
    Run one statement and return its rows together with the status row count.
    """
    try:
        async with pool().acquire() as conn:
            statement = await conn.prepare(sql)
            records = await statement.fetch(*args)
            status = statement.get_statusmsg()
    except _STORE_FAILURES as exc:
        raise StoreError(f"Query failed: {exc}") from exc

    command, count = parse_status(status)
    return QueryResult(
        rows=[_record_to_dict(r) for r in records],
        row_count=count,
        command=command,
    )


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    try:
        await pool().execute(sql, *args)
    except _STORE_FAILURES as exc:
        raise StoreError(f"Statement failed: {exc}") from exc
