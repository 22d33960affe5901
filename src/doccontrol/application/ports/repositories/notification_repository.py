"""Notification record repository port."""

from typing import Protocol
from uuid import UUID

from doccontrol.domain.entities import NotificationRecord


class NotificationRepository(Protocol):
    """Port for fired reminder thresholds."""

    async def list_fired_days(self, document_id: UUID) -> list[int]: ...

    async def add(self, record: NotificationRecord) -> NotificationRecord: ...

    async def clear(self, document_id: UUID) -> None:
        """Forget fired thresholds so reminders re-arm for a new expiry date."""
        ...
