"""Document repository port."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol
from uuid import UUID

from doccontrol.domain.entities import Document
from doccontrol.domain.value_objects import DocumentStatus


@dataclass(frozen=True)
class ExpectedState:
    """State a conditional update expects to find in storage (compare-and-swap key)."""

    status: DocumentStatus
    current_version: int
    lock_holder_id: str | None

    @classmethod
    def of(cls, document: Document) -> "ExpectedState":
        return cls(
            status=document.status,
            current_version=document.current_version,
            lock_holder_id=document.lock_holder,
        )


@dataclass
class DocumentFilters:
    """Search filters for listing documents.

    With as_of set, statuses match the effective status at that instant: a
    non-terminal document whose expiry date has passed counts as expired.
    """

    categories: list[str] = field(default_factory=list)
    statuses: list[DocumentStatus] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    created_by: list[str] = field(default_factory=list)
    search_term: str | None = None
    expiring_before: datetime | None = None
    as_of: datetime | None = None


class DocumentRepository(Protocol):
    """Port for document persistence."""

    async def get_by_id(
        self, document_id: UUID, include_deleted: bool = False
    ) -> Document | None: ...

    async def list(
        self,
        *,
        readable_by: str | None = None,
        filters: DocumentFilters | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Document], str | None]: ...

    async def list_with_expiry(self) -> list[Document]: ...

    async def create(self, document: Document) -> Document: ...

    async def update_if(self, document: Document, expected: ExpectedState) -> bool: ...
