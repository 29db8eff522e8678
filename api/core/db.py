"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`). Requests beyond the pool size wait
for a free connection.

Every storage fault is logged here with full detail and re-raised as the
opaque `DatabaseQueryError`; nothing asyncpg-specific leaves this module.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import config
from .errors import DatabaseQueryError

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None

# `questions.id` and `answers.question_id` are int4 columns.
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1

STORAGE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def fits_int4(value: int) -> bool:
    return INT4_MIN <= value <= INT4_MAX


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


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=config.db_pool_min_size(),
        max_size=config.db_pool_max_size(),
        command_timeout=config.db_command_timeout_s(),
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


@asynccontextmanager
async def _storage_boundary(sql: str) -> AsyncIterator[None]:
    try:
        yield
    except STORAGE_ERRORS as exc:
        # Only the first line of the statement, the full text is in the source.
        statement = sql.strip().splitlines()[0] if sql.strip() else ""
        logger.error("db_query_failed statement=%r error=%r", statement, exc, exc_info=exc)
        raise DatabaseQueryError(statement) from exc


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    async with _storage_boundary(sql):
        row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    async with _storage_boundary(sql):
        rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]

