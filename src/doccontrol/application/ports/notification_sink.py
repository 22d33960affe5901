"""Notification sink port."""

from typing import Protocol

from doccontrol.domain.events import DomainEvent


class NotificationSink(Protocol):
    """Receives domain events. Delivery is fire-and-forget from the core's point of view."""

    async def emit(self, event: DomainEvent) -> None: ...
