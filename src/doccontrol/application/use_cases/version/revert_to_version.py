"""Revert to version use case."""

import logging
from datetime import timedelta
from uuid import UUID, uuid4

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.application.use_cases.guards import (
    ensure_not_expired,
    ensure_not_locked_by_other,
    load_document,
    record_activity,
    require_capability,
    save_document,
)
from doccontrol.domain.entities import DocumentVersion
from doccontrol.domain.exceptions import NotFound, PreconditionFailed
from doccontrol.domain.value_objects import ActivityAction, Capability

logger = logging.getLogger(__name__)


class RevertToVersionUseCase:
    """Append a new version that points at an older revision's content.

    History is never rewritten: the target and every later row stay as they are.
    """

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

    async def execute(
        self,
        user_id: str,
        document_id: UUID,
        version_number: int,
        change_notes: str | None = None,
    ) -> DocumentOutput:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.WRITE
            )
            ensure_not_expired(document, now)
            if not document.status.is_lockable:
                raise PreconditionFailed(
                    f"Cannot revert a document in status {document.status.value}",
                    document_id=document.id,
                    current_status=document.status.value,
                    lock_holder=document.lock_holder,
                )
            ensure_not_locked_by_other(document, user_id, now, self._lock_lease)

            target = await uow.versions.get(document_id, version_number)
            if target is None:
                raise NotFound("Version", f"{document_id} v{version_number}")

            expected = ExpectedState.of(document)
            new_number = document.current_version + 1
            notes = (change_notes or "").strip() or f"Reverted to version {version_number}"
            document.current_version = new_number
            document.file_name = target.file_name
            document.file_size = target.file_size
            document.file_type = target.file_type
            document.file_path = target.blob_locator
            document.updated_at = now
            document.last_action = notes
            # The conditional write claims the version number before the ledger row is added.
            await save_document(uow, document, expected)
            await uow.versions.append(
                DocumentVersion(
                    id=uuid4(),
                    document_id=document_id,
                    version_number=new_number,
                    file_name=target.file_name,
                    file_size=target.file_size,
                    file_type=target.file_type,
                    blob_locator=target.blob_locator,
                    created_by=user_id,
                    created_at=now,
                    change_notes=notes,
                )
            )
            await record_activity(
                uow,
                document,
                ActivityAction.REVERT,
                user_id,
                now,
                comment=notes,
                version_number=new_number,
            )

        logger.info(
            "Document %s reverted to v%d as v%d by %s",
            document_id,
            version_number,
            new_number,
            user_id,
        )
        return DocumentOutput.from_entity(document, now)
