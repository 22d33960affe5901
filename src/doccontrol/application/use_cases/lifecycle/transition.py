"""Shared flow for requested lifecycle transitions."""

import logging
from datetime import timedelta
from uuid import UUID

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.application.ports import Clock, NotificationSink, PermissionChecker
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.application.use_cases.guards import (
    ensure_not_expired,
    ensure_not_locked_by_other,
    load_document,
    publish_events,
    record_activity,
    require_capability,
    save_document,
)
from doccontrol.domain.events import DomainEvent
from doccontrol.domain.exceptions import Locked
from doccontrol.domain.lifecycle import (
    LifecycleAction,
    LifecycleStateMachine,
    apply_transition,
)

logger = logging.getLogger(__name__)


class TransitionDocumentUseCase:
    """Move a document through the lifecycle on behalf of a user.

    Subclasses set `action` and may override `_validate_comment`.
    """

    action: LifecycleAction

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        clock: Clock,
        state_machine: LifecycleStateMachine | None = None,
        notification_sink: NotificationSink | None = None,
        lock_lease: timedelta | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._clock = clock
        self._state_machine = state_machine or LifecycleStateMachine()
        self._notification_sink = notification_sink
        self._lock_lease = lock_lease

    def _validate_comment(self, comment: str | None) -> str | None:
        if comment is None:
            return None
        return comment.strip() or None

    async def execute(
        self, user_id: str, document_id: UUID, comment: str | None = None
    ) -> DocumentOutput:
        """Apply the transition. Fails without side effects when any guard does not hold."""
        capability = self._state_machine.required_capability(self.action)
        now = self._clock.now()
        events: list[DomainEvent] = []

        async with self._uow_factory() as uow:
            document = await load_document(uow, document_id)
            if capability is not None:
                await require_capability(
                    self._permission_checker, user_id, document, capability
                )
            ensure_not_expired(document, now)
            transition = self._state_machine.transition_for(document, self.action)
            comment = self._validate_comment(comment)
            ensure_not_locked_by_other(document, user_id, now, self._lock_lease)

            expected = ExpectedState.of(document)
            held_by = document.lock_holder
            if transition.requires_unlocked and document.lock is not None:
                if not document.lock.is_stale(now, self._lock_lease):
                    raise Locked(
                        f"Document must be checked in before it can be {transition.to_status.value}",
                        document_id=document.id,
                        current_status=document.status.value,
                        lock_holder=document.lock_holder,
                    )
                document.lock = None

            before = apply_transition(document, transition, user_id, now, comment)
            released = held_by if held_by and document.lock is None else None
            await save_document(uow, document, expected)
            await record_activity(
                uow,
                document,
                transition.activity,
                user_id,
                now,
                comment=_with_release(comment, released),
                from_status=before,
                to_status=document.status,
                version_number=document.current_version,
            )
            if transition.notification is not None:
                events.append(
                    DomainEvent(
                        document_id=document.id,
                        kind=transition.notification,
                        occurred_at=now,
                        payload={
                            "title": document.title,
                            "from_status": before.value,
                            "to_status": document.status.value,
                            "actor_id": user_id,
                            "comment": comment,
                            "version": document.current_version,
                            "released_lock_holder": released,
                        },
                    )
                )

        logger.info(
            "Document %s %s -> %s by %s",
            document_id,
            before.value,
            document.status.value,
            user_id,
        )
        await publish_events(self._notification_sink, events)
        return DocumentOutput.from_entity(document, now)


def _with_release(comment: str | None, released: str | None) -> str | None:
    if released is None:
        return comment
    note = f"Lock held by {released} released"
    return f"{comment} ({note})" if comment else note
