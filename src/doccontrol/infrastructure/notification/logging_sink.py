"""Notification sink that only logs events."""

import logging

from doccontrol.domain.events import DomainEvent

logger = logging.getLogger(__name__)


class LoggingNotificationSink:
    async def emit(self, event: DomainEvent) -> None:
        logger.info(
            "Notification %s for document %s: %s",
            event.kind.value,
            event.document_id,
            event.payload,
        )
