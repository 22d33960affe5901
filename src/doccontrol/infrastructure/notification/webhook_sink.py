"""Notification sink that POSTs events to a webhook."""

import logging

import httpx

from doccontrol.domain.events import DomainEvent

logger = logging.getLogger(__name__)


class WebhookNotificationSink:
    """Delivers each event as JSON. Non-2xx responses raise httpx.HTTPStatusError."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def emit(self, event: DomainEvent) -> None:
        response = await self._client.post(self._url, json=event.to_dict())
        response.raise_for_status()
        logger.debug("Delivered %s for document %s", event.kind.value, event.document_id)
