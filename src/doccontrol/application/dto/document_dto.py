"""Document DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from doccontrol.domain.entities import Document
from doccontrol.domain.expiry import days_until_expiry, effective_status
from doccontrol.domain.value_objects import DocumentStatus


@dataclass
class DocumentUploadInput:
    """Input for uploading a new document."""

    title: str
    category: str
    file_name: str
    file_type: str
    content: bytes
    description: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class DocumentMetadataPatch:
    """Metadata changes; None leaves a field untouched."""

    title: str | None = None
    description: str | None = None
    category: str | None = None
    tags: list[str] | None = None

    def is_empty(self) -> bool:
        return all(
            v is None for v in (self.title, self.description, self.category, self.tags)
        )


@dataclass
class DocumentOutput:
    """Output DTO for document. status is the effective status (expiry applied)."""

    id: UUID
    title: str
    description: str | None
    category: str
    status: DocumentStatus
    current_version: int
    file_name: str
    file_size: int
    file_type: str
    created_by: str
    created_at: datetime
    updated_at: datetime
    expiry_date: datetime | None
    days_until_expiry: int | None
    notification_days: list[int] | None
    lock_holder: str | None
    locked_at: datetime | None
    tags: list[str]
    approved_by: str | None
    approved_at: datetime | None
    rejection_reason: str | None
    last_action: str | None

    @classmethod
    def from_entity(cls, document: Document, now: datetime) -> "DocumentOutput":
        return cls(
            id=document.id,
            title=document.title,
            description=document.description,
            category=document.category,
            status=effective_status(document, now),
            current_version=document.current_version,
            file_name=document.file_name,
            file_size=document.file_size,
            file_type=document.file_type,
            created_by=document.created_by,
            created_at=document.created_at,
            updated_at=document.updated_at,
            expiry_date=document.expiry_date,
            days_until_expiry=(
                days_until_expiry(now, document.expiry_date) if document.expiry_date else None
            ),
            notification_days=(
                list(document.custom_notification_days)
                if document.custom_notification_days is not None
                else None
            ),
            lock_holder=document.lock_holder,
            locked_at=document.lock.acquired_at if document.lock else None,
            tags=list(document.tags),
            approved_by=document.approved_by,
            approved_at=document.approved_at,
            rejection_reason=document.rejection_reason,
            last_action=document.last_action,
        )
