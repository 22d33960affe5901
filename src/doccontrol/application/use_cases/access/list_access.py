"""List access grants use case."""

from uuid import UUID

from doccontrol.application.ports import PermissionChecker
from doccontrol.application.use_cases.guards import load_document, require_capability
from doccontrol.domain.entities import DocumentAccess
from doccontrol.domain.value_objects import Capability


class ListAccessUseCase:
    def __init__(self, unit_of_work_factory: type, permission_checker: PermissionChecker):
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, document_id: UUID) -> list[DocumentAccess]:
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.ADMIN
            )
            return await uow.access.list_by_document(document_id)
