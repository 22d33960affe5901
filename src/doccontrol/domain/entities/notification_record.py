"""Notification record - a reminder threshold that has already fired."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class NotificationRecord:
    id: UUID
    document_id: UUID
    due_in_days: int
    triggered_at: datetime
