"""Document comment repository port."""

from typing import Protocol
from uuid import UUID

from doccontrol.domain.entities import DocumentComment


class CommentRepository(Protocol):
    """Port for document comments."""

    async def add(self, comment: DocumentComment) -> DocumentComment: ...

    async def list_by_document(self, document_id: UUID) -> list[DocumentComment]: ...
