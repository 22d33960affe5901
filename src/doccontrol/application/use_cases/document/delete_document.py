"""Delete document use case (soft delete)."""

import logging
from datetime import timedelta
from uuid import UUID

from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.application.use_cases.guards import (
    ensure_not_locked_by_other,
    load_document,
    record_activity,
    require_capability,
    save_document,
)
from doccontrol.domain.value_objects import ActivityAction, Capability

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """Tombstone a document. The version ledger and activity log are kept."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        clock: Clock,
        lock_lease: timedelta | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._clock = clock
        self._lock_lease = lock_lease

    async def execute(self, user_id: str, document_id: UUID) -> None:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.ADMIN
            )
            ensure_not_locked_by_other(document, user_id, now, self._lock_lease)

            expected = ExpectedState.of(document)
            document.lock = None
            document.deleted_at = now
            document.updated_at = now
            await save_document(uow, document, expected)
            await record_activity(
                uow,
                document,
                ActivityAction.DELETE,
                user_id,
                now,
                from_status=document.status,
                version_number=document.current_version,
            )

        logger.info("Document %s deleted by %s", document_id, user_id)
