"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. FastAPI creates it in the app lifespan
(see `api/main.py`), keeps it on `app.state.db` and hands it to repositories
through `get_database`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Every driver-level failure (query error, lost connection, timeout) leaves this
module as `StoreError`, so callers only ever deal with one store exception.
"""

from __future__ import annotations

import asyncio
import json
import logging
import ssl
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg
from fastapi import Request

from .errors import StoreError
from .settings import Settings

logger = logging.getLogger(__name__)

_STORE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def insecure_ssl_context() -> ssl.SSLContext:
    """
    TLS for the store connection without peer certificate verification.
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


async def _init_connection(conn: asyncpg.Connection) -> None:
    # Opaque project fields (links, images, ...) live in jsonb columns.
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )


def affected_rows(status: str) -> int:
    """
    Parse the row count out of an asyncpg command status ("DELETE 3" -> 3).
    """
    parts = (status or "").split()
    if not parts or not parts[-1].isdigit():
        return 0
    return int(parts[-1])


class Database:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._pool: asyncpg.Pool | None = None
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        async with self._connect_lock:
            if self._pool is not None:
                return None
            try:
                self._pool = await asyncpg.create_pool(
                    dsn=self.settings.database_url,
                    ssl=insecure_ssl_context() if self.settings.database_ssl else None,
                    min_size=self.settings.pool_min_size,
                    max_size=self.settings.pool_max_size,
                    command_timeout=self.settings.command_timeout,
                    init=_init_connection,
                )
            except _STORE_ERRORS:
                # Keep serving; the next request tries to open the pool again.
                logger.exception("db_pool_create_failed")
                return None
        logger.info(
            "db_pool_opened min_size=%s max_size=%s",
            self.settings.pool_min_size,
            self.settings.pool_max_size,
        )

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    async def check_connection(self) -> bool:
        """
        Startup connectivity probe. Logs the outcome, never raises.
        """
        try:
            await self.fetch_value("SELECT 1")
        except StoreError:
            logger.exception("db_connect_failed")
            return False
        logger.info("db_connected")
        return True

    async def pool(self) -> asyncpg.Pool:
        """
        The live pool, opening it first when startup (or a previous attempt)
        could not.
        """
        if self._pool is None:
            await self.connect()
        if self._pool is None:
            raise StoreError("DB pool is not initialized.")
        return self._pool

    async def fetch_value(self, sql: str, *args: Any) -> Any:
        try:
            pool = await self.pool()
            return await pool.fetchval(sql, *args)
        except _STORE_ERRORS as exc:
            raise StoreError(str(exc)) from exc

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            pool = await self.pool()
            row = await pool.fetchrow(sql, *args)
        except _STORE_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            pool = await self.pool()
            rows = await pool.fetch(sql, *args)
        except _STORE_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE). Returns the affected row count.
        """
        try:
            pool = await self.pool()
            status = await pool.execute(sql, *args)
        except _STORE_ERRORS as exc:
            raise StoreError(str(exc)) from exc
        return affected_rows(status)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Check out one connection and run a transaction on it.

        Commits when the block exits normally, rolls back on any exception.
        The connection goes back to the pool on every exit path.
        """
        try:
            pool = await self.pool()
            async with pool.acquire() as conn:  # type: asyncpg.Connection
                async with conn.transaction():
                    yield conn
        except _STORE_ERRORS as exc:
            raise StoreError(str(exc)) from exc


def get_database(request: Request) -> Database:
    return request.app.state.db
