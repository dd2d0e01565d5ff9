"""Database connection pool management."""

import asyncio
import logging
from typing import Optional

import asyncpg
from asyncpg import Pool

from ..config import Settings
from ..errors.exceptions import PoolNeverInitializedError
from .migrations import run_migration


logger = logging.getLogger(__name__)


async def create_pool(settings: Settings) -> Pool:
    """Create a connection pool from settings without running migrations."""
    return await asyncpg.create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        max_inactive_connection_lifetime=settings.db_connection_max_idle_time,
        command_timeout=settings.db_command_timeout
    )


class DatabaseManager:
    """Owns the connection pool of an application.

    The pool is created and migrated exactly once, on the first ``get_pool``
    call; concurrent first callers wait for that attempt and share its result.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pool: Optional[Pool] = None
        self._lock = asyncio.Lock()
        self._attempted = False
        self._init_error: Optional[BaseException] = None

    @property
    def initialized(self) -> bool:
        """Whether a pool is available."""
        return self.pool is not None

    async def _initialize(self) -> None:
        pool = await create_pool(self.settings)
        try:
            await run_migration(self.settings)
        except BaseException:
            await pool.close()
            raise
        self.pool = pool
        logger.info("Database connection pool initialized")

    async def get_pool(self) -> Pool:
        """Return the pool, creating and migrating it on first use.

        Raises:
            PoolNeverInitializedError: If an earlier initialization attempt failed
        """
        async with self._lock:
            if not self._attempted:
                self._attempted = True
                try:
                    await self._initialize()
                except Exception as e:
                    self._init_error = e
                    logger.error(f"Failed to initialize database: {e}")
                    raise

        if self.pool is None:
            raise PoolNeverInitializedError() from self._init_error
        return self.pool

    async def verify(self) -> None:
        """Check connectivity with a trivial query."""
        pool = await self.get_pool()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        logger.info("Database connectivity verified")

    async def close(self) -> None:
        """Close the database connection pool.

        A later ``get_pool`` call starts a fresh initialization.
        """
        async with self._lock:
            if self.pool:
                await self.pool.close()
                self.pool = None
                logger.info("Database connections closed")
            self._attempted = False
            self._init_error = None
