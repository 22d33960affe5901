"""Get document use case."""

from uuid import UUID

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.use_cases.guards import load_document, require_capability
from doccontrol.domain.value_objects import Capability


class GetDocumentUseCase:
    """Get document by id. Locked documents are always readable."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        clock: Clock,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._clock = clock

    async def execute(self, user_id: str, document_id: UUID) -> DocumentOutput:
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.READ
            )
        return DocumentOutput.from_entity(document, self._clock.now())
