"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from doccontrol.infrastructure.persistence.postgres.access_repository import (
    PostgresAccessRepository,
)
from doccontrol.infrastructure.persistence.postgres.activity_repository import (
    PostgresActivityRepository,
)
from doccontrol.infrastructure.persistence.postgres.comment_repository import (
    PostgresCommentRepository,
)
from doccontrol.infrastructure.persistence.postgres.document_repository import (
    PostgresDocumentRepository,
)
from doccontrol.infrastructure.persistence.postgres.notification_repository import (
    PostgresNotificationRepository,
)
from doccontrol.infrastructure.persistence.postgres.version_repository import (
    PostgresVersionRepository,
)


class PostgresUnitOfWork:
    """One pooled connection, one transaction, every document-related repository on it."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._documents = PostgresDocumentRepository(self._conn)
        self._versions = PostgresVersionRepository(self._conn)
        self._access = PostgresAccessRepository(self._conn)
        self._activities = PostgresActivityRepository(self._conn)
        self._comments = PostgresCommentRepository(self._conn)
        self._notifications = PostgresNotificationRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def documents(self) -> PostgresDocumentRepository:
        return self._documents

    @property
    def versions(self) -> PostgresVersionRepository:
        return self._versions

    @property
    def access(self) -> PostgresAccessRepository:
        return self._access

    @property
    def activities(self) -> PostgresActivityRepository:
        return self._activities

    @property
    def comments(self) -> PostgresCommentRepository:
        return self._comments

    @property
    def notifications(self) -> PostgresNotificationRepository:
        return self._notifications

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory. Commits when the block exits cleanly, rolls back otherwise."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        async with PostgresUnitOfWork(pool) as uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
