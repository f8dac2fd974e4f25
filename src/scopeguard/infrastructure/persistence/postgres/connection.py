"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

from scopeguard.config import Settings


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Create async connection pool from settings.

    Pool is created with open=False. Caller must call await pool.open()
    before use (done by PoolLifespanMiddleware on ASGI startup).
    """
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=False,
        name="scopeguard",
    )
