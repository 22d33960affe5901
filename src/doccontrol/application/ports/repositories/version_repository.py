"""Document version repository port - append only."""

from typing import Protocol
from uuid import UUID

from doccontrol.domain.entities import DocumentVersion


class VersionRepository(Protocol):
    """Port for the version ledger. There is no update or delete."""

    async def append(self, version: DocumentVersion) -> DocumentVersion: ...

    async def get(self, document_id: UUID, version_number: int) -> DocumentVersion | None: ...

    async def list_by_document(self, document_id: UUID) -> list[DocumentVersion]: ...

    async def count_by_document(self, document_id: UUID) -> int: ...
