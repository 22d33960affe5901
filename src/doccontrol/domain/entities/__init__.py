"""Domain entities."""

from doccontrol.domain.entities.document import Document, normalize_tags
from doccontrol.domain.entities.document_access import DocumentAccess
from doccontrol.domain.entities.document_activity import DocumentActivity
from doccontrol.domain.entities.document_comment import DocumentComment
from doccontrol.domain.entities.document_version import DocumentVersion
from doccontrol.domain.entities.notification_record import NotificationRecord

__all__ = [
    "Document",
    "DocumentAccess",
    "DocumentActivity",
    "DocumentComment",
    "DocumentVersion",
    "NotificationRecord",
    "normalize_tags",
]
