"""Check out (lock) a document."""

import logging
from datetime import timedelta
from uuid import UUID

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.application.use_cases.guards import (
    ensure_not_expired,
    load_document,
    record_activity,
    require_capability,
    save_document,
)
from doccontrol.domain.exceptions import AlreadyLocked, PreconditionFailed
from doccontrol.domain.value_objects import ActivityAction, Capability, DocumentLock

logger = logging.getLogger(__name__)


class CheckoutDocumentUseCase:
    """Take the exclusive edit lock. Checking out twice as the holder is a no-op."""

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

    async def execute(self, user_id: str, document_id: UUID) -> DocumentOutput:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.WRITE
            )
            ensure_not_expired(document, now)
            if not document.status.is_lockable:
                raise PreconditionFailed(
                    f"Cannot check out a document in status {document.status.value}",
                    document_id=document.id,
                    current_status=document.status.value,
                    lock_holder=document.lock_holder,
                )

            lock = document.lock
            if lock is not None and lock.is_held_by(user_id):
                return DocumentOutput.from_entity(document, now)

            comment = None
            if lock is not None:
                if not lock.is_stale(now, self._lock_lease):
                    raise AlreadyLocked(
                        f"Document is already checked out by {lock.holder_id}",
                        document_id=document.id,
                        current_status=document.status.value,
                        lock_holder=lock.holder_id,
                    )
                comment = f"Reclaimed stale lock held by {lock.holder_id}"
                logger.info(
                    "Reclaiming stale lock on %s from %s for %s",
                    document_id,
                    lock.holder_id,
                    user_id,
                )

            expected = ExpectedState.of(document)
            document.lock = DocumentLock(holder_id=user_id, acquired_at=now)
            document.updated_at = now
            document.last_action = "Checked out"
            await save_document(uow, document, expected)
            await record_activity(
                uow,
                document,
                ActivityAction.CHECKOUT,
                user_id,
                now,
                comment=comment,
                version_number=document.current_version,
            )

        logger.info("Document %s checked out by %s", document_id, user_id)
        return DocumentOutput.from_entity(document, now)
