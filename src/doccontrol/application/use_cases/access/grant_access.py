"""Grant access use case."""

import logging
from uuid import UUID, uuid4

from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.use_cases.guards import (
    load_document,
    record_activity,
    require_capability,
)
from doccontrol.domain.entities import DocumentAccess
from doccontrol.domain.exceptions import ValidationError
from doccontrol.domain.value_objects import ActivityAction, Capability, PermissionLevel

logger = logging.getLogger(__name__)


class GrantAccessUseCase:
    """Give a user a permission level on a document, replacing any existing grant."""

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
        grantee_id: str,
        permission_level: str | PermissionLevel,
    ) -> DocumentAccess:
        grantee_id = (grantee_id or "").strip()
        if not grantee_id:
            raise ValidationError("user_id is required")
        try:
            level = PermissionLevel(permission_level)
        except ValueError:
            allowed = ", ".join(p.value for p in PermissionLevel)
            raise ValidationError(
                f"Invalid permission level {permission_level!r}; expected one of {allowed}"
            ) from None

        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.ADMIN
            )
            existing = await uow.access.get_for_document(document_id, grantee_id)
            access = await uow.access.upsert(
                DocumentAccess(
                    id=existing.id if existing else uuid4(),
                    document_id=document_id,
                    user_id=grantee_id,
                    permission_level=level,
                    granted_by=user_id,
                    granted_at=now,
                )
            )
            await record_activity(
                uow,
                document,
                ActivityAction.GRANT_ACCESS,
                user_id,
                now,
                comment=f"Granted {level.value} to {grantee_id}",
            )

        logger.info(
            "Granted %s on document %s to %s by %s", level.value, document_id, grantee_id, user_id
        )
        return access
