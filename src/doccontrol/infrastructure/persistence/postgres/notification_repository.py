"""PostgreSQL fired-reminder repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from doccontrol.domain.entities import NotificationRecord


class PostgresNotificationRepository:
    """Fired thresholds, unique per (document_id, due_in_days)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_fired_days(self, document_id: UUID) -> list[int]:
        cur = await self._conn.execute(
            "SELECT due_in_days FROM document_notification WHERE document_id = %s",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def add(self, record: NotificationRecord) -> NotificationRecord:
        await self._conn.execute(
            "INSERT INTO document_notification (id, document_id, due_in_days, triggered_at) "
            "VALUES (%s, %s, %s, %s) ON CONFLICT (document_id, due_in_days) DO NOTHING",
            (record.id, record.document_id, record.due_in_days, record.triggered_at),
        )
        return record

    async def clear(self, document_id: UUID) -> None:
        await self._conn.execute(
            "DELETE FROM document_notification WHERE document_id = %s",
            (document_id,),
        )
