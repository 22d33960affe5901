"""Document access grant."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from doccontrol.domain.value_objects import PermissionLevel


@dataclass
class DocumentAccess:
    """Grant of a permission level to a user on a document. Unique per (document, user)."""

    id: UUID
    document_id: UUID
    user_id: str
    permission_level: PermissionLevel
    granted_by: str
    granted_at: datetime
