"""Administrative lock release."""

import logging
from uuid import UUID

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.application.use_cases.guards import (
    load_document,
    record_activity,
    require_capability,
    save_document,
)
from doccontrol.domain.value_objects import ActivityAction, Capability

logger = logging.getLogger(__name__)


class ForceUnlockUseCase:
    """Drop whatever lock is held. Requires admin; unlocked documents are returned unchanged."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._clock = clock

    async def execute(self, user_id: str, document_id: UUID) -> DocumentOutput:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.ADMIN
            )
            if document.lock is None:
                return DocumentOutput.from_entity(document, now)

            previous_holder = document.lock.holder_id
            expected = ExpectedState.of(document)
            document.lock = None
            document.updated_at = now
            document.last_action = "Lock released by administrator"
            await save_document(uow, document, expected)
            await record_activity(
                uow,
                document,
                ActivityAction.FORCE_UNLOCK,
                user_id,
                now,
                comment=f"Released lock held by {previous_holder}",
            )

        logger.warning(
            "Lock on document %s held by %s force-released by %s",
            document_id,
            previous_holder,
            user_id,
        )
        return DocumentOutput.from_entity(document, now)
