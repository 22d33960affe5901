"""Document access repository port."""

from typing import Protocol
from uuid import UUID

from doccontrol.domain.entities import DocumentAccess


class AccessRepository(Protocol):
    """Port for access grant persistence."""

    async def get_for_document(self, document_id: UUID, user_id: str) -> DocumentAccess | None: ...

    async def list_by_document(self, document_id: UUID) -> list[DocumentAccess]: ...

    async def upsert(self, access: DocumentAccess) -> DocumentAccess: ...

    async def delete(self, access_id: UUID) -> None: ...
