"""Periodic expiry sweep."""

import logging
from uuid import uuid4

from doccontrol.application.dto.expiry_dto import SweepReport
from doccontrol.application.ports import Clock, NotificationSink
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.application.use_cases.guards import (
    publish_events,
    record_activity,
    save_document,
)
from doccontrol.domain.entities import Document, NotificationRecord
from doccontrol.domain.events import DomainEvent
from doccontrol.domain.exceptions import PreconditionFailed
from doccontrol.domain.expiry import days_until_expiry, due_thresholds, is_expired
from doccontrol.domain.lifecycle import (
    LifecycleAction,
    LifecycleStateMachine,
    apply_transition,
)
from doccontrol.domain.value_objects import NotificationKind, NotificationSchedule

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "system"


class ExpirySweepUseCase:
    """Persist expiry and send due reminders for every document with an expiry date.

    Each document is handled in its own unit of work. Running the sweep twice in a row
    changes nothing the second time.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        clock: Clock,
        notification_sink: NotificationSink | None = None,
        default_schedule: NotificationSchedule | None = None,
        state_machine: LifecycleStateMachine | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock
        self._notification_sink = notification_sink
        self._default_schedule = default_schedule or NotificationSchedule.default()
        self._state_machine = state_machine or LifecycleStateMachine()

    async def execute(self) -> SweepReport:
        now = self._clock.now()
        report = SweepReport()

        async with self._uow_factory() as uow:
            candidates = await uow.documents.list_with_expiry()

        for candidate in candidates:
            if candidate.status.is_terminal or candidate.expiry_date is None:
                continue
            try:
                if is_expired(now, candidate.expiry_date):
                    await self._expire(candidate.id, now, report)
                else:
                    await self._warn(candidate, now, report)
            except PreconditionFailed as e:
                # Changed under us; the next sweep sees the new state.
                logger.info("Sweep skipped document %s: %s", candidate.id, e.message)
                report.skipped.append(candidate.id)

        if not report.is_empty:
            logger.info(
                "Expiry sweep: %d expired, %d warned, %d skipped",
                len(report.expired),
                len(report.warned),
                len(report.skipped),
            )
        return report

    async def _expire(self, document_id, now, report: SweepReport) -> None:
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if document is None or document.status.is_terminal:
                return
            transition = self._state_machine.transition_for(document, LifecycleAction.EXPIRE)
            expected = ExpectedState.of(document)
            released = document.lock_holder
            before = apply_transition(document, transition, SYSTEM_ACTOR, now)
            await save_document(uow, document, expected)
            await record_activity(
                uow,
                document,
                transition.activity,
                SYSTEM_ACTOR,
                now,
                comment=f"Lock held by {released} released" if released else None,
                from_status=before,
                to_status=document.status,
                version_number=document.current_version,
            )

        report.expired.append(document_id)
        logger.info("Document %s expired (was %s)", document_id, before.value)
        await publish_events(
            self._notification_sink,
            [
                DomainEvent(
                    document_id=document_id,
                    kind=NotificationKind.EXPIRED,
                    occurred_at=now,
                    payload={
                        "title": document.title,
                        "from_status": before.value,
                        "expiry_date": document.expiry_date.isoformat(),
                        "released_lock_holder": released,
                    },
                )
            ],
        )

    async def _warn(self, candidate: Document, now, report: SweepReport) -> None:
        schedule = candidate.notification_schedule(self._default_schedule)
        if not schedule:
            return
        async with self._uow_factory() as uow:
            fired = await uow.notifications.list_fired_days(candidate.id)
            due = due_thresholds(now, candidate.expiry_date, schedule, fired)
            for days in due:
                await uow.notifications.add(
                    NotificationRecord(
                        id=uuid4(),
                        document_id=candidate.id,
                        due_in_days=days,
                        triggered_at=now,
                    )
                )
        if not due:
            return

        report.warned[candidate.id] = due
        await publish_events(
            self._notification_sink,
            [
                DomainEvent(
                    document_id=candidate.id,
                    kind=NotificationKind.EXPIRATION_WARNING,
                    occurred_at=now,
                    payload={
                        "title": candidate.title,
                        "expiry_date": candidate.expiry_date.isoformat(),
                        "days_until_expiry": days_until_expiry(now, candidate.expiry_date),
                        "thresholds": due,
                    },
                )
            ],
        )
