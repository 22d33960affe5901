"""List documents use case."""

from dataclasses import replace
from datetime import timedelta
from uuid import UUID

from doccontrol.application.dto.document_dto import DocumentOutput
from doccontrol.application.ports import Clock
from doccontrol.application.ports.repositories import DocumentFilters
from doccontrol.domain.exceptions import ValidationError

MAX_PAGE_SIZE = 100


class ListDocumentsUseCase:
    """List documents the caller can read, with search filters and cursor pagination.

    Status filters match the status a document reads as now, so a document past its
    expiry date is listed as expired before the sweep has persisted it.
    """

    def __init__(self, unit_of_work_factory: type, clock: Clock) -> None:
        self._uow_factory = unit_of_work_factory
        self._clock = clock

    async def execute(
        self,
        user_id: str,
        filters: DocumentFilters | None = None,
        *,
        expiring_within_days: int | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[DocumentOutput], str | None]:
        """Return one page of documents and the cursor of the next page."""
        if limit < 1:
            raise ValidationError("limit must be positive")
        limit = min(limit, MAX_PAGE_SIZE)
        if cursor:
            try:
                UUID(cursor)
            except ValueError:
                raise ValidationError(f"Malformed cursor: {cursor!r}") from None
        now = self._clock.now()
        filters = replace(filters or DocumentFilters(), as_of=now)
        if expiring_within_days is not None:
            if expiring_within_days < 0:
                raise ValidationError("expiring_within_days must not be negative")
            filters = replace(
                filters, expiring_before=now + timedelta(days=expiring_within_days)
            )

        async with self._uow_factory() as uow:
            documents, next_cursor = await uow.documents.list(
                readable_by=user_id,
                filters=filters,
                cursor=cursor or None,
                limit=limit,
            )
        return [DocumentOutput.from_entity(d, now) for d in documents], next_cursor
