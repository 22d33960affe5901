"""Set expiry settings use case."""

import logging
from datetime import UTC, timedelta
from uuid import UUID

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.application.dto.expiry_dto import ExpirySettingsInput
from doccontrol.application.ports import Clock, PermissionChecker
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.application.use_cases.guards import (
    ensure_not_locked_by_other,
    load_document,
    record_activity,
    require_capability,
    save_document,
)
from doccontrol.domain.exceptions import PreconditionFailed, ValidationError
from doccontrol.domain.value_objects import (
    ActivityAction,
    Capability,
    DocumentStatus,
    NotificationSchedule,
)

logger = logging.getLogger(__name__)

_FROZEN_STATUSES = frozenset({DocumentStatus.ARCHIVED, DocumentStatus.EXPIRED})


class SetExpirySettingsUseCase:
    """Set or clear the expiry date and reminder schedule.

    A new expiry date re-arms reminders: thresholds fired for the old date are forgotten.
    A date in the past is accepted; the document then reads as expired.
    """

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
        self, user_id: str, document_id: UUID, settings: ExpirySettingsInput
    ) -> DocumentOutput:
        expiry_date = settings.expiry_date
        if expiry_date is not None and expiry_date.tzinfo is None:
            expiry_date = expiry_date.replace(tzinfo=UTC)
        if settings.notifications_enabled and expiry_date is None:
            raise ValidationError("An expiry date is required when notifications are enabled")

        if not settings.notifications_enabled:
            notification_days: list[int] | None = []
        elif settings.notification_days is None:
            notification_days = None
        else:
            notification_days = list(NotificationSchedule.of(settings.notification_days))

        now = self._clock.now()
        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            await require_capability(
                self._permission_checker, user_id, document, Capability.WRITE
            )
            if document.status in _FROZEN_STATUSES:
                raise PreconditionFailed(
                    f"Expiry settings are read-only in status {document.status.value}",
                    document_id=document.id,
                    current_status=document.status.value,
                    lock_holder=document.lock_holder,
                )
            ensure_not_locked_by_other(document, user_id, now, self._lock_lease)

            expected = ExpectedState.of(document)
            date_changed = document.expiry_date != expiry_date
            document.expiry_date = expiry_date
            document.custom_notification_days = notification_days
            document.updated_at = now
            document.last_action = (
                f"Expiry set to {expiry_date.date().isoformat()}"
                if expiry_date
                else "Expiry cleared"
            )
            await save_document(uow, document, expected)
            if date_changed:
                await uow.notifications.clear(document_id)
            await record_activity(
                uow,
                document,
                ActivityAction.EXPIRY_SETTINGS,
                user_id,
                now,
                comment=document.last_action,
            )

        logger.info("Document %s expiry settings updated by %s", document_id, user_id)
        return DocumentOutput.from_entity(document, now)
