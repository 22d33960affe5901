"""Document version entity - one row of the append-only ledger."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class DocumentVersion:
    """Stored revision of a document. Never mutated after creation."""

    id: UUID
    document_id: UUID
    version_number: int
    file_name: str
    file_size: int
    file_type: str
    blob_locator: str
    created_by: str
    created_at: datetime
    change_notes: str | None = None
