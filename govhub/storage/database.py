"""
PostgreSQL access for the feedback service.

Only used when STORAGE_BACKEND=postgres. A single asyncpg pool is shared
by the project directory and the feedback store; connections are tagged
with an application name so they can be told apart in pg_stat_activity.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg

from govhub.config.settings import get_settings

logger = logging.getLogger(__name__)

APPLICATION_NAME = "govhub-feedback"


class Database:
    """
    asyncpg pool wrapper.

    Usage:
        db = Database()
        await db.connect()

        async with db.locked_transaction("p1") as conn:
            await conn.fetchrow("INSERT INTO project_feedback ... RETURNING *")

        await db.close()
    """

    def __init__(
        self,
        database_url: str | None = None,
        min_size: int | None = None,
        max_size: int | None = None,
    ):
        settings = get_settings()

        self._dsn = database_url or str(settings.database_url)
        self._min_size = min_size or settings.db_pool_min_size
        self._max_size = max_size or settings.db_pool_max_size
        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._pool

    async def connect(self) -> None:
        """Open the pool."""
        try:
            self._pool = await asyncpg.create_pool(
                self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=30,
                server_settings={"application_name": APPLICATION_NAME},
            )
        except (OSError, asyncpg.PostgresError) as e:
            logger.error(f"Could not open database pool: {e}")
            raise
        logger.info(f"Database pool open ({self._min_size}-{self._max_size} connections)")

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
        async with self.pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """Run the block in a transaction on one pooled connection."""
        async with self._connection() as conn:
            async with conn.transaction():
                yield conn

    @asynccontextmanager
    async def locked_transaction(self, lock_key: str) -> AsyncIterator[asyncpg.Connection]:
        """
        Transaction holding a transaction-scoped advisory lock on ``lock_key``.

        Blocks that lock the same key run one at a time across every
        process sharing the database; the lock is released at commit or
        rollback.

        Args:
            lock_key: Text key hashed to the advisory lock id (e.g. a project id)
        """
        async with self.transaction() as conn:
            await conn.execute("SELECT pg_advisory_xact_lock(hashtext($1))", lock_key)
            yield conn

    async def apply_schema(self, ddl: str) -> None:
        """Run idempotent DDL (CREATE ... IF NOT EXISTS) in one transaction."""
        async with self.transaction() as conn:
            await conn.execute(ddl)

    async def execute(self, query: str, *args: Any) -> str:
        async with self._connection() as conn:
            return await conn.execute(query, *args)

    async def fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
        async with self._connection() as conn:
            return await conn.fetch(query, *args)

    async def fetchrow(self, query: str, *args: Any) -> asyncpg.Record | None:
        async with self._connection() as conn:
            return await conn.fetchrow(query, *args)

    async def fetchval(self, query: str, *args: Any) -> Any:
        async with self._connection() as conn:
            return await conn.fetchval(query, *args)

    async def health_check(self) -> bool:
        """True if the pool can answer ``SELECT 1``."""
        try:
            return await self.fetchval("SELECT 1") == 1
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return False


_database: Database | None = None


async def get_database() -> Database:
    """Shared Database, connected on first use."""
    global _database

    if _database is None:
        database = Database()
        await database.connect()
        _database = database

    return _database


async def close_database() -> None:
    global _database

    if _database is not None:
        await _database.close()
        _database = None
