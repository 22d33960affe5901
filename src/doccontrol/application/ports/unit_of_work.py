"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from doccontrol.application.ports.repositories.access_repository import AccessRepository
from doccontrol.application.ports.repositories.activity_repository import (
    ActivityRepository,
)
from doccontrol.application.ports.repositories.comment_repository import CommentRepository
from doccontrol.application.ports.repositories.document_repository import DocumentRepository
from doccontrol.application.ports.repositories.notification_repository import (
    NotificationRepository,
)
from doccontrol.application.ports.repositories.version_repository import VersionRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def documents(self) -> DocumentRepository: ...

    @property
    def versions(self) -> VersionRepository: ...

    @property
    def access(self) -> AccessRepository: ...

    @property
    def activities(self) -> ActivityRepository: ...

    @property
    def comments(self) -> CommentRepository: ...

    @property
    def notifications(self) -> NotificationRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
