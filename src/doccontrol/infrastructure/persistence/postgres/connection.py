"""PostgreSQL async connection pool."""

import logging

from psycopg import OperationalError
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    The pool starts closed; PoolLifespanMiddleware (API) or the sweeper opens it.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )


async def ping(pool: AsyncConnectionPool) -> bool:
    """True when a pooled connection answers a trivial query."""
    try:
        async with pool.connection(timeout=2.0) as conn:
            await conn.execute("SELECT 1")
        return True
    except (OperationalError, TimeoutError) as e:
        logger.warning("Database ping failed: %s", e)
        return False
