"""Permission checker implementation - checks against document access grants."""

import logging
from uuid import UUID

from doccontrol.domain.value_objects import Capability

logger = logging.getLogger(__name__)


class GrantPermissionChecker:
    """A user has a capability when their grant's level includes it."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def has_capability(self, user_id: str, document_id: UUID, capability: Capability) -> bool:
        async with self._uow_factory() as uow:
            access = await uow.access.get_for_document(document_id, user_id)
        if access is None:
            logger.debug("No grant for %s on document %s", user_id, document_id)
            return False
        return capability in access.permission_level.capabilities
