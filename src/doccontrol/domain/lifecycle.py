"""Document lifecycle state machine.

Transitions are declared as data; the machine looks up the single transition that
matches the current status and requested action, or fails with PreconditionFailed.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from doccontrol.domain.entities import Document
from doccontrol.domain.exceptions import PreconditionFailed
from doccontrol.domain.value_objects import (
    ActivityAction,
    Capability,
    DocumentStatus,
    NotificationKind,
)


class LifecycleAction(StrEnum):
    """Requests that move a document between statuses."""

    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    PUBLISH = "publish"
    ARCHIVE = "archive"
    REOPEN = "reopen"
    EXPIRE = "expire"


@dataclass(frozen=True)
class StatusTransition:
    """
    A legal status change.

    Attributes:
        from_statuses: Statuses the action may start from
        to_status: Resulting status
        action: Action that triggers the transition
        capability: Capability the caller needs; None for system-triggered transitions
        activity: Activity log action recorded for the transition
        notification: Event kind emitted after the transition, if any
        requires_unlocked: Whether any lock (even the caller's) blocks the transition
    """

    from_statuses: frozenset[DocumentStatus]
    to_status: DocumentStatus
    action: LifecycleAction
    capability: Capability | None
    activity: ActivityAction
    notification: NotificationKind | None = None
    requires_unlocked: bool = False


NON_TERMINAL_STATUSES = frozenset(
    {
        DocumentStatus.DRAFT,
        DocumentStatus.PENDING_APPROVAL,
        DocumentStatus.APPROVED,
        DocumentStatus.PUBLISHED,
        DocumentStatus.REJECTED,
    }
)


def default_transitions(publish_on_approval: bool = False) -> list[StatusTransition]:
    """All valid transitions. Approval lands on PUBLISHED when publish_on_approval is set."""
    approved_status = (
        DocumentStatus.PUBLISHED if publish_on_approval else DocumentStatus.APPROVED
    )
    return [
        StatusTransition(
            from_statuses=frozenset({DocumentStatus.DRAFT}),
            to_status=DocumentStatus.PENDING_APPROVAL,
            action=LifecycleAction.SUBMIT,
            capability=Capability.WRITE,
            activity=ActivityAction.SUBMIT,
            notification=NotificationKind.APPROVAL_REQUEST,
        ),
        StatusTransition(
            from_statuses=frozenset({DocumentStatus.PENDING_APPROVAL}),
            to_status=approved_status,
            action=LifecycleAction.APPROVE,
            capability=Capability.APPROVE,
            activity=ActivityAction.APPROVE,
            notification=NotificationKind.APPROVAL_COMPLETED,
        ),
        StatusTransition(
            from_statuses=frozenset({DocumentStatus.PENDING_APPROVAL}),
            to_status=DocumentStatus.REJECTED,
            action=LifecycleAction.REJECT,
            capability=Capability.APPROVE,
            activity=ActivityAction.REJECT,
            notification=NotificationKind.REJECTION,
        ),
        StatusTransition(
            from_statuses=frozenset({DocumentStatus.APPROVED}),
            to_status=DocumentStatus.PUBLISHED,
            action=LifecycleAction.PUBLISH,
            capability=Capability.APPROVE,
            activity=ActivityAction.PUBLISH,
            notification=NotificationKind.APPROVAL_COMPLETED,
        ),
        StatusTransition(
            from_statuses=frozenset(
                {DocumentStatus.DRAFT, DocumentStatus.APPROVED, DocumentStatus.PUBLISHED}
            ),
            to_status=DocumentStatus.ARCHIVED,
            action=LifecycleAction.ARCHIVE,
            capability=Capability.ADMIN,
            activity=ActivityAction.ARCHIVE,
            requires_unlocked=True,
        ),
        StatusTransition(
            from_statuses=frozenset({DocumentStatus.REJECTED}),
            to_status=DocumentStatus.DRAFT,
            action=LifecycleAction.REOPEN,
            capability=Capability.WRITE,
            activity=ActivityAction.REOPEN,
        ),
        StatusTransition(
            from_statuses=NON_TERMINAL_STATUSES,
            to_status=DocumentStatus.EXPIRED,
            action=LifecycleAction.EXPIRE,
            capability=None,
            activity=ActivityAction.EXPIRE,
            notification=NotificationKind.EXPIRED,
        ),
    ]


class LifecycleStateMachine:
    """Looks up and applies lifecycle transitions."""

    def __init__(
        self,
        transitions: list[StatusTransition] | None = None,
        *,
        publish_on_approval: bool = False,
    ) -> None:
        self._transitions = transitions or default_transitions(publish_on_approval)
        self._by_action: dict[LifecycleAction, list[StatusTransition]] = {}
        for t in self._transitions:
            self._by_action.setdefault(t.action, []).append(t)

    def transition_for(self, document: Document, action: LifecycleAction) -> StatusTransition:
        """Return the transition for action from the document's status.

        Raises PreconditionFailed when the status does not allow the action.
        """
        for t in self._by_action.get(action, []):
            if document.status in t.from_statuses:
                return t
        raise PreconditionFailed(
            f"Cannot {action.value} a document in status {document.status.value}",
            document_id=document.id,
            current_status=document.status.value,
            lock_holder=document.lock_holder,
        )

    def required_capability(self, action: LifecycleAction) -> Capability | None:
        """Capability needed to request action. None means only the system may trigger it."""
        candidates = self._by_action.get(action)
        if not candidates:
            raise ValueError(f"No transition defined for {action.value}")
        return candidates[0].capability

    def allowed_actions(self, status: DocumentStatus) -> list[LifecycleAction]:
        """Actions that are legal from status, in declaration order."""
        return [t.action for t in self._transitions if status in t.from_statuses]

    def can(self, status: DocumentStatus, action: LifecycleAction) -> bool:
        return action in self.allowed_actions(status)


def _last_action(transition: StatusTransition, comment: str | None) -> str:
    labels = {
        LifecycleAction.SUBMIT: "Submitted for approval",
        LifecycleAction.APPROVE: "Approved",
        LifecycleAction.REJECT: "Rejected",
        LifecycleAction.PUBLISH: "Published",
        LifecycleAction.ARCHIVE: "Archived",
        LifecycleAction.REOPEN: "Reopened as draft",
        LifecycleAction.EXPIRE: "Expired",
    }
    label = labels[transition.action]
    return f"{label}: {comment}" if comment else label


def apply_transition(
    document: Document,
    transition: StatusTransition,
    actor_id: str,
    now: datetime,
    comment: str | None = None,
) -> DocumentStatus:
    """Mutate document for transition. Returns the status it had before."""
    before = document.status
    document.status = transition.to_status
    document.updated_at = now
    document.last_action = _last_action(transition, comment)

    if transition.action is LifecycleAction.SUBMIT:
        document.pending_since = now
        document.rejection_reason = None
    elif transition.action is LifecycleAction.APPROVE:
        document.pending_since = None
        document.approved_by = actor_id
        document.approved_at = now
    elif transition.action is LifecycleAction.REJECT:
        document.pending_since = None
        document.rejection_reason = comment
    elif transition.action is LifecycleAction.EXPIRE:
        document.pending_since = None

    # Only lockable statuses may carry a lock.
    if not document.status.is_lockable:
        document.lock = None

    return before
