"""Lifespan middleware - owns the connection pool for the server's lifetime."""

from typing import Any

from psycopg_pool import AsyncConnectionPool

from scopeguard.logging import get_logger

logger = get_logger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool on ASGI startup and closes it on shutdown."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await self._pool.open(wait=True)
        logger.info("pool_opened", min_size=self._pool.min_size, max_size=self._pool.max_size)

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await self._pool.close()
        logger.info("pool_closed")
