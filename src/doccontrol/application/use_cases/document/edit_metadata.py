"""Edit document metadata use case."""

import logging
from datetime import timedelta
from uuid import UUID

from doccontrol.application.dto.document_dto import DocumentMetadataPatch, DocumentOutput
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
from doccontrol.domain.entities import normalize_tags
from doccontrol.domain.exceptions import PreconditionFailed, ValidationError
from doccontrol.domain.value_objects import (
    READ_ONLY_METADATA_STATUSES,
    ActivityAction,
    Capability,
)

logger = logging.getLogger(__name__)


class EditMetadataUseCase:
    """Change title, description, category or tags."""

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
        self, user_id: str, document_id: UUID, patch: DocumentMetadataPatch
    ) -> DocumentOutput:
        if patch.is_empty():
            raise ValidationError("No metadata changes supplied")
        if patch.title is not None and not patch.title.strip():
            raise ValidationError("Title must not be empty")
        if patch.category is not None and not patch.category.strip():
            raise ValidationError("Category must not be empty")

        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.WRITE
            )
            ensure_not_expired(document, now)
            ensure_not_locked_by_other(document, user_id, now, self._lock_lease)
            if document.status in READ_ONLY_METADATA_STATUSES:
                raise PreconditionFailed(
                    f"Metadata is read-only in status {document.status.value}",
                    document_id=document.id,
                    current_status=document.status.value,
                    lock_holder=document.lock_holder,
                )

            expected = ExpectedState.of(document)
            changed: list[str] = []
            if patch.title is not None:
                document.title = patch.title.strip()
                changed.append("title")
            if patch.description is not None:
                document.description = patch.description
                changed.append("description")
            if patch.category is not None:
                document.category = patch.category.strip()
                changed.append("category")
            if patch.tags is not None:
                document.tags = normalize_tags(patch.tags)
                changed.append("tags")
            document.updated_at = now

            await save_document(uow, document, expected)
            await record_activity(
                uow,
                document,
                ActivityAction.UPDATE,
                user_id,
                now,
                comment=f"Updated {', '.join(changed)}",
            )

        logger.info("Document %s metadata updated by %s: %s", document_id, user_id, changed)
        return DocumentOutput.from_entity(document, now)
