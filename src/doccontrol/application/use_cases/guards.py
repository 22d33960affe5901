"""Guards and helpers shared by document use cases."""

import logging
from datetime import datetime, timedelta
from uuid import UUID, uuid4

from doccontrol.application.ports import NotificationSink, PermissionChecker, UnitOfWork
from doccontrol.application.ports.repositories import ExpectedState
from doccontrol.domain.entities import Document, DocumentActivity
from doccontrol.domain.events import DomainEvent
from doccontrol.domain.exceptions import (
    Locked,
    NotFound,
    PermissionDenied,
    PreconditionFailed,
)
from doccontrol.domain.expiry import is_expired
from doccontrol.domain.value_objects import ActivityAction, Capability, DocumentStatus

logger = logging.getLogger(__name__)


async def load_document(uow: UnitOfWork, document_id: UUID) -> Document:
    """Get a live (not deleted) document or raise NotFound."""
    document = await uow.documents.get_by_id(document_id)
    if not document or document.deleted_at:
        raise NotFound("Document", str(document_id))
    return document


async def require_capability(
    permission_checker: PermissionChecker,
    user_id: str,
    document: Document,
    capability: Capability,
) -> None:
    has_capability = await permission_checker.has_capability(user_id, document.id, capability)
    if not has_capability:
        raise PermissionDenied(
            f"User does not have {capability.value} access to document",
            document_id=document.id,
            current_status=document.status.value,
            lock_holder=document.lock_holder,
        )


def ensure_not_locked_by_other(
    document: Document,
    user_id: str,
    now: datetime,
    lease: timedelta | None = None,
) -> None:
    """Raise Locked when another user holds a lock that has not gone stale."""
    lock = document.lock
    if lock is None or lock.is_held_by(user_id) or lock.is_stale(now, lease):
        return
    raise Locked(
        f"Document is checked out by {lock.holder_id}",
        document_id=document.id,
        current_status=document.status.value,
        lock_holder=lock.holder_id,
    )


def ensure_not_expired(document: Document, now: datetime) -> None:
    """Raise PreconditionFailed when the expiry date has passed but the sweep has not run yet."""
    if not document.status.is_terminal and is_expired(now, document.expiry_date):
        raise PreconditionFailed(
            f"Document expired on {document.expiry_date.isoformat()}",
            document_id=document.id,
            current_status=DocumentStatus.EXPIRED.value,
            lock_holder=document.lock_holder,
        )


async def save_document(uow: UnitOfWork, document: Document, expected: ExpectedState) -> None:
    """Conditionally persist document; raise PreconditionFailed if another writer got there first."""
    updated = await uow.documents.update_if(document, expected)
    if updated:
        return
    current = await uow.documents.get_by_id(document.id)
    raise PreconditionFailed(
        "Document was modified concurrently",
        document_id=document.id,
        current_status=current.status.value if current else None,
        lock_holder=current.lock_holder if current else None,
    )


async def record_activity(
    uow: UnitOfWork,
    document: Document,
    action: ActivityAction,
    actor_id: str,
    now: datetime,
    *,
    comment: str | None = None,
    from_status: DocumentStatus | None = None,
    to_status: DocumentStatus | None = None,
    version_number: int | None = None,
) -> DocumentActivity:
    activity = DocumentActivity(
        id=uuid4(),
        document_id=document.id,
        action=action,
        actor_id=actor_id,
        occurred_at=now,
        comment=comment,
        from_status=from_status,
        to_status=to_status,
        version_number=version_number,
    )
    return await uow.activities.add(activity)


async def publish_events(sink: NotificationSink | None, events: list[DomainEvent]) -> None:
    """Hand events to the sink after commit. Delivery failures are logged, not raised."""
    if sink is None:
        return
    for event in events:
        try:
            await sink.emit(event)
        except Exception:
            logger.warning(
                "Notification sink failed for %s on document %s",
                event.kind.value,
                event.document_id,
                exc_info=True,
            )
