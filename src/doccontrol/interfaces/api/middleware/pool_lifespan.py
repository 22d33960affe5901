"""Lifespan middleware - opens and closes long-lived resources with the ASGI server."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class PoolLifespanMiddleware:
    """Opens the connection pool on startup; on shutdown closes it and any extra closables.

    closables are objects with an async close() (HTTP clients of the blob store or webhook).
    """

    def __init__(self, pool: AsyncConnectionPool, closables: list[Any] | None = None) -> None:
        self._pool = pool
        self._closables = closables or []

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open()
        logger.info("Database pool opened")

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        for closable in self._closables:
            await closable.close()
        await self._pool.close()
        logger.info("Database pool closed")
