"""Document comment entity - free-text discussion attached to a document."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class DocumentComment:
    id: UUID
    document_id: UUID
    author_id: str
    author_name: str
    content: str
    created_at: datetime
