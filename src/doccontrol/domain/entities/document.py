"""Document entity - aggregate root of the lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from doccontrol.domain.value_objects import DocumentLock, DocumentStatus, NotificationSchedule


@dataclass
class Document:
    """Controlled document: metadata, status, current version pointer, lock and expiry."""

    id: UUID
    title: str
    category: str
    status: DocumentStatus
    current_version: int
    file_name: str
    file_size: int
    file_type: str
    file_path: str
    created_by: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    expiry_date: datetime | None = None
    custom_notification_days: list[int] | None = None
    lock: DocumentLock | None = None
    tags: list[str] = field(default_factory=list)
    approved_by: str | None = None
    approved_at: datetime | None = None
    rejection_reason: str | None = None
    last_action: str | None = None
    pending_since: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def lock_holder(self) -> str | None:
        return self.lock.holder_id if self.lock else None

    def is_locked_by_other(self, user_id: str) -> bool:
        return self.lock is not None and not self.lock.is_held_by(user_id)

    def notification_schedule(self, default: NotificationSchedule) -> NotificationSchedule:
        """Reminder schedule: custom days when set (possibly empty), else the platform default."""
        if self.custom_notification_days is None:
            return default
        return NotificationSchedule.of(self.custom_notification_days)


def normalize_tags(tags: list[str] | None) -> list[str]:
    """Strip, drop empties and duplicates, keep first-seen order."""
    seen: dict[str, None] = {}
    for tag in tags or []:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)
