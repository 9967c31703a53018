"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns one connection pool. The FastAPI lifespan creates it on
startup and closes it on shutdown (see `api/main.py`); handlers receive it
through `core.store`, never through a module global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Driver errors are converted to `StoreFailure` here so feature code never
imports asyncpg exceptions.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings
from .errors import DuplicateRecord, StoreFailure

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


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


def _ssl_mode() -> str | bool:
    # Hosted Postgres presents certificates we do not pin.
    return "require" if settings.is_production() else False


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        command_timeout: float = 30.0,
        max_size: int = 5,
    ) -> None:
        self.dsn = dsn
        self.command_timeout = command_timeout
        self.max_size = max_size
        self._pool: asyncpg.Pool | None = None

    @classmethod
    def from_env(cls) -> "Database":
        return cls(
            database_url(),
            command_timeout=settings.db_command_timeout_s(),
            max_size=settings.db_pool_max_size(),
        )

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=1,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
            ssl=_ssl_mode(),
        )
        logger.info("db_pool_opened max_size=%s", self.max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def apply_schema(self, path: Path = SCHEMA_PATH) -> None:
        await self.execute(path.read_text(encoding="utf-8"))

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            row = await self.pool().fetchrow(sql, *args, timeout=self.command_timeout)
        except asyncpg.UniqueViolationError as exc:
            raise DuplicateRecord(str(exc)) from exc
        except _DRIVER_ERRORS as exc:
            logger.exception("db_fetch_one_failed")
            raise StoreFailure(str(exc)) from exc
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            rows = await self.pool().fetch(sql, *args, timeout=self.command_timeout)
        except _DRIVER_ERRORS as exc:
            logger.exception("db_fetch_all_failed")
            raise StoreFailure(str(exc)) from exc
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> None:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
        """
        try:
            await self.pool().execute(sql, *args, timeout=self.command_timeout)
        except _DRIVER_ERRORS as exc:
            logger.exception("db_execute_failed")
            raise StoreFailure(str(exc)) from exc
