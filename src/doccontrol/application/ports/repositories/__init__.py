"""Repository ports."""

from doccontrol.application.ports.repositories.access_repository import AccessRepository
from doccontrol.application.ports.repositories.activity_repository import (
    ActivityRepository,
)
from doccontrol.application.ports.repositories.comment_repository import CommentRepository
from doccontrol.application.ports.repositories.document_repository import (
    DocumentFilters,
    DocumentRepository,
    ExpectedState,
)
from doccontrol.application.ports.repositories.notification_repository import (
    NotificationRepository,
)
from doccontrol.application.ports.repositories.version_repository import VersionRepository

__all__ = [
    "AccessRepository",
    "ActivityRepository",
    "CommentRepository",
    "DocumentFilters",
    "DocumentRepository",
    "ExpectedState",
    "NotificationRepository",
    "VersionRepository",
]
