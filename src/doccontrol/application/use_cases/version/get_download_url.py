"""Signed download URL use case."""

from uuid import UUID

from doccontrol.application.ports import BlobStore, PermissionChecker
from doccontrol.application.use_cases.guards import load_document, require_capability
from doccontrol.domain.exceptions import NotFound
from doccontrol.domain.value_objects import Capability


class GetDownloadUrlUseCase:
    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        blob_store: BlobStore,
        ttl_seconds: int = 300,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._blob_store = blob_store
        self._ttl_seconds = ttl_seconds

    async def execute(
        self, user_id: str, document_id: UUID, version_number: int | None = None
    ) -> str:
        """Time-limited URL for a revision; the current one when version_number is None."""
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.READ
            )
            number = version_number or document.current_version
            version = await uow.versions.get(document_id, number)
            if version is None:
                raise NotFound("Version", f"{document_id} v{number}")
        return await self._blob_store.signed_url(version.blob_locator, self._ttl_seconds)
