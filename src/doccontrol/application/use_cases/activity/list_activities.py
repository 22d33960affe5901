"""List activities use case."""

from uuid import UUID

from doccontrol.application.ports import PermissionChecker
from doccontrol.application.use_cases.guards import load_document, require_capability
from doccontrol.domain.entities import DocumentActivity
from doccontrol.domain.value_objects import Capability


class ListActivitiesUseCase:
    """Audit trail of a document in the order it happened."""

    def __init__(self, unit_of_work_factory: type, permission_checker: PermissionChecker):
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, document_id: UUID) -> list[DocumentActivity]:
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.READ
            )
            activities = await uow.activities.list_by_document(document_id)
        return sorted(activities, key=lambda a: a.occurred_at)
