"""Document activity repository port."""

from typing import Protocol
from uuid import UUID

from doccontrol.domain.entities import DocumentActivity


class ActivityRepository(Protocol):
    """Port for the activity log."""

    async def add(self, activity: DocumentActivity) -> DocumentActivity: ...

    async def list_by_document(self, document_id: UUID) -> list[DocumentActivity]: ...
