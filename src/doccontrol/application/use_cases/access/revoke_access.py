"""Revoke access use case."""

import logging
from uuid import UUID

from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.use_cases.guards import (
    load_document,
    record_activity,
    require_capability,
)
from doccontrol.domain.exceptions import NotFound
from doccontrol.domain.value_objects import ActivityAction, Capability

logger = logging.getLogger(__name__)


class RevokeAccessUseCase:
    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._clock = clock

    async def execute(self, user_id: str, document_id: UUID, grantee_id: str) -> None:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.ADMIN
            )
            existing = await uow.access.get_for_document(document_id, grantee_id)
            if existing is None:
                raise NotFound("Access grant", f"{document_id}/{grantee_id}")
            await uow.access.delete(existing.id)
            await record_activity(
                uow,
                document,
                ActivityAction.REVOKE_ACCESS,
                user_id,
                now,
                comment=f"Revoked {existing.permission_level.value} from {grantee_id}",
            )
        logger.info("Revoked access on document %s from %s by %s", document_id, grantee_id, user_id)
