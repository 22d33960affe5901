"""Permission checker port - per-document capabilities."""

from typing import Protocol
from uuid import UUID

from doccontrol.domain.value_objects import Capability


class PermissionChecker(Protocol):
    """Port for checking user capabilities on documents."""

    async def has_capability(
        self, user_id: str, document_id: UUID, capability: Capability
    ) -> bool: ...
