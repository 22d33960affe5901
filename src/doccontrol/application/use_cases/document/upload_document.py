"""Upload document use case."""

import logging
from uuid import uuid4

from doccontrol.application.dto.document_dto import DocumentOutput, DocumentUploadInput
from doccontrol.application.ports import BlobStore, Clock
from doccontrol.application.storage import put_with_retry, storage_key
from doccontrol.application.use_cases.guards import record_activity
from doccontrol.domain.entities import (
    Document,
    DocumentAccess,
    DocumentVersion,
    normalize_tags,
)
from doccontrol.domain.exceptions import ValidationError
from doccontrol.domain.value_objects import ActivityAction, DocumentStatus, PermissionLevel

logger = logging.getLogger(__name__)


class UploadDocumentUseCase:
    """Store content, then create the document at Draft/v1 with its first ledger row."""

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

    async def execute(self, user_id: str, input_data: DocumentUploadInput) -> DocumentOutput:
        """Upload document. The uploader becomes its admin."""
        title = (input_data.title or "").strip()
        category = (input_data.category or "").strip()
        file_name = (input_data.file_name or "").strip()
        if not title:
            raise ValidationError("Title is required")
        if not category:
            raise ValidationError("Category is required")
        if not file_name:
            raise ValidationError("File name is required")

        doc_id = uuid4()
        # Content is stored before any row is written so a failed upload leaves no state behind.
        locator = await put_with_retry(
            self._blob_store,
            storage_key(doc_id, 1, file_name),
            input_data.content,
            input_data.file_type,
            attempts=self._storage_max_attempts,
            backoff_seconds=self._storage_backoff_seconds,
        )

        now = self._clock.now()
        document = Document(
            id=doc_id,
            title=title,
            description=input_data.description,
            category=category,
            status=DocumentStatus.DRAFT,
            current_version=1,
            file_name=file_name,
            file_size=len(input_data.content),
            file_type=input_data.file_type,
            file_path=locator,
            created_by=user_id,
            created_at=now,
            updated_at=now,
            tags=normalize_tags(input_data.tags),
            last_action="Created",
        )
        version = DocumentVersion(
            id=uuid4(),
            document_id=doc_id,
            version_number=1,
            file_name=file_name,
            file_size=document.file_size,
            file_type=document.file_type,
            blob_locator=locator,
            created_by=user_id,
            created_at=now,
            change_notes="Initial version",
        )
        owner_access = DocumentAccess(
            id=uuid4(),
            document_id=doc_id,
            user_id=user_id,
            permission_level=PermissionLevel.ADMIN,
            granted_by=user_id,
            granted_at=now,
        )

        async with self._uow_factory() as uow:
            await uow.documents.create(document)
            await uow.versions.append(version)
            await uow.access.upsert(owner_access)
            await record_activity(
                uow,
                document,
                ActivityAction.CREATE,
                user_id,
                now,
                to_status=DocumentStatus.DRAFT,
                version_number=1,
            )

        logger.info("Document %s uploaded by %s (%s)", doc_id, user_id, file_name)
        return DocumentOutput.from_entity(document, now)
