"""List versions use case."""

from uuid import UUID

from doccontrol.application.ports import PermissionChecker
from doccontrol.application.use_cases.guards import load_document, require_capability
from doccontrol.domain.entities import DocumentVersion
from doccontrol.domain.value_objects import Capability


class ListVersionsUseCase:
    """Ledger rows of a document, oldest first."""

    def __init__(self, unit_of_work_factory: type, permission_checker: PermissionChecker):
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, user_id: str, document_id: UUID) -> list[DocumentVersion]:
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.READ
            )
            versions = await uow.versions.list_by_document(document_id)
        return sorted(versions, key=lambda v: v.version_number)
