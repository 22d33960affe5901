"""Check in (unlock) a document, optionally appending a new version."""

import logging
from datetime import datetime
from uuid import UUID, uuid4

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.application.dto.version_dto import CheckinInput, VersionDetails
from doccontrol.application.ports import BlobStore, Clock, UnitOfWork
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.application.storage import put_with_retry, storage_key
from doccontrol.application.use_cases.guards import (
    ensure_not_expired,
    load_document,
    record_activity,
    save_document,
)
from doccontrol.domain.entities import Document, DocumentVersion
from doccontrol.domain.exceptions import NotLockedByCaller, PreconditionFailed, ValidationError
from doccontrol.domain.value_objects import ActivityAction

logger = logging.getLogger(__name__)


def _ensure_holder(document: Document, user_id: str) -> None:
    if document.lock is None or not document.lock.is_held_by(user_id):
        raise NotLockedByCaller(
            "Document is not checked out by the caller",
            document_id=document.id,
            current_status=document.status.value,
            lock_holder=document.lock_holder,
        )


class CheckinDocumentUseCase:
    """Release the caller's lock.

    With create_new_version, the new content is uploaded first, then the ledger row,
    the version pointer and the lock release are written in one transaction.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        blob_store: BlobStore,
        clock: Clock,
        storage_max_attempts: int = 3,
        storage_backoff_seconds: float = 0.5,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._blob_store = blob_store
        self._clock = clock
        self._storage_max_attempts = storage_max_attempts
        self._storage_backoff_seconds = storage_backoff_seconds

    async def execute(
        self, user_id: str, document_id: UUID, input_data: CheckinInput | None = None
    ) -> DocumentOutput:
        input_data = input_data or CheckinInput()
        if not input_data.create_new_version:
            return await self._release(user_id, document_id)

        details = input_data.version_details
        if details is None:
            raise ValidationError("Version details are required to create a new version")
        if not (details.file_name or "").strip():
            raise ValidationError("File name is required")

        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            _ensure_holder(document, user_id)
            ensure_not_expired(document, self._clock.now())
            next_version = document.current_version + 1

        locator = await put_with_retry(
            self._blob_store,
            storage_key(document_id, next_version, details.file_name.strip()),
            details.content,
            details.file_type,
            attempts=self._storage_max_attempts,
            backoff_seconds=self._storage_backoff_seconds,
        )

        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            _ensure_holder(document, user_id)
            ensure_not_expired(document, now)
            if document.current_version + 1 != next_version:
                raise PreconditionFailed(
                    "Document version changed during check-in",
                    document_id=document.id,
                    current_status=document.status.value,
                    lock_holder=document.lock_holder,
                )
            await self._append_version(uow, document, user_id, details, locator, now)

        logger.info("Document %s checked in by %s as v%d", document_id, user_id, next_version)
        return DocumentOutput.from_entity(document, now)

    async def _release(self, user_id: str, document_id: UUID) -> DocumentOutput:
        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            _ensure_holder(document, user_id)
            expected = ExpectedState.of(document)
            document.lock = None
            document.updated_at = now
            document.last_action = "Checked in"
            await save_document(uow, document, expected)
            await record_activity(
                uow,
                document,
                ActivityAction.CHECKIN,
                user_id,
                now,
                version_number=document.current_version,
            )
        logger.info("Document %s checked in by %s", document_id, user_id)
        return DocumentOutput.from_entity(document, now)

    async def _append_version(
        self,
        uow: UnitOfWork,
        document: Document,
        user_id: str,
        details: VersionDetails,
        locator: str,
        now: datetime,
    ) -> None:
        expected = ExpectedState.of(document)
        version_number = document.current_version + 1
        version = DocumentVersion(
            id=uuid4(),
            document_id=document.id,
            version_number=version_number,
            file_name=details.file_name.strip(),
            file_size=len(details.content),
            file_type=details.file_type,
            blob_locator=locator,
            created_by=user_id,
            created_at=now,
            change_notes=details.change_notes,
        )

        document.current_version = version_number
        document.file_name = version.file_name
        document.file_size = version.file_size
        document.file_type = version.file_type
        document.file_path = locator
        document.lock = None
        document.updated_at = now
        document.last_action = f"Checked in version {version_number}"
        # The conditional write claims the version number before the ledger row is added.
        await save_document(uow, document, expected)
        await uow.versions.append(version)
        await record_activity(
            uow,
            document,
            ActivityAction.CHECKIN,
            user_id,
            now,
            comment=details.change_notes,
            version_number=version_number,
        )
