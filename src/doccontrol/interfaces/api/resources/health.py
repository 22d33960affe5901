"""Health check endpoints."""

from collections.abc import Awaitable, Callable

import falcon
import falcon.asgi


class HealthResource:
    """Liveness always answers; readiness asks the database."""

    def __init__(self, database_check: Callable[[], Awaitable[bool]] | None = None) -> None:
        self._database_check = database_check

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness."""
        if self._database_check is not None and not await self._database_check():
            resp.media = {"status": "unavailable", "database": "down"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
