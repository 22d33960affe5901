"""List comments use case."""

from uuid import UUID

from doccontrol.application.ports import PermissionChecker
from doccontrol.application.use_cases.guards import load_document, require_capability
from doccontrol.domain.entities import DocumentComment
from doccontrol.domain.value_objects import Capability


class ListCommentsUseCase:
    """Comments on a document, oldest first."""

    def __init__(self, unit_of_work_factory: type, permission_checker: PermissionChecker):
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, document_id: UUID) -> list[DocumentComment]:
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.READ
            )
            comments = await uow.comments.list_by_document(document_id)
        return sorted(comments, key=lambda c: c.created_at)
