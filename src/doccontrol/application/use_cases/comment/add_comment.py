"""Add comment use case."""

import logging
from uuid import UUID, uuid4

from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.use_cases.guards import (
    load_document,
    record_activity,
    require_capability,
)
from doccontrol.domain.entities import DocumentComment
from doccontrol.domain.exceptions import ValidationError
from doccontrol.domain.value_objects import ActivityAction, Capability

logger = logging.getLogger(__name__)

MAX_COMMENT_LENGTH = 4000


class AddCommentUseCase:
    """Attach a comment to a document.

    Anyone who can read the document may comment, in any status and whoever holds
    the lock. Comments never change the document itself.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._clock = clock

    async def execute(
        self,
        user_id: str,
        document_id: UUID,
        content: str,
        author_name: str | None = None,
    ) -> DocumentComment:
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment content is required")
        if len(content) > MAX_COMMENT_LENGTH:
            raise ValidationError(
                f"Comment is longer than {MAX_COMMENT_LENGTH} characters"
            )

        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.READ
            )
            comment = await uow.comments.add(
                DocumentComment(
                    id=uuid4(),
                    document_id=document_id,
                    author_id=user_id,
                    author_name=(author_name or "").strip() or user_id,
                    content=content,
                    created_at=now,
                )
            )
            await record_activity(uow, document, ActivityAction.COMMENT, user_id, now)

        logger.info("Comment %s added to document %s by %s", comment.id, document_id, user_id)
        return comment
