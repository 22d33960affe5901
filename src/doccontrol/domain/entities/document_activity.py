"""Document activity entity - audit trail entry."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from doccontrol.domain.value_objects import ActivityAction, DocumentStatus


@dataclass(frozen=True)
class DocumentActivity:
    """Who did what to a document and when."""

    id: UUID
    document_id: UUID
    action: ActivityAction
    actor_id: str
    occurred_at: datetime
    comment: str | None = None
    from_status: DocumentStatus | None = None
    to_status: DocumentStatus | None = None
    version_number: int | None = None
