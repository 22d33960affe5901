"""PostgreSQL activity log repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from doccontrol.domain.entities import DocumentActivity
from doccontrol.domain.value_objects import ActivityAction, DocumentStatus


class PostgresActivityRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def add(self, activity: DocumentActivity) -> DocumentActivity:
        await self._conn.execute(
            "INSERT INTO document_activity "
            "(id, document_id, action, actor_id, occurred_at, comment, from_status, to_status, "
            "version_number) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                activity.id,
                activity.document_id,
                activity.action.value,
                activity.actor_id,
                activity.occurred_at,
                activity.comment,
                activity.from_status.value if activity.from_status else None,
                activity.to_status.value if activity.to_status else None,
                activity.version_number,
            ),
        )
        return activity

    async def list_by_document(self, document_id: UUID) -> list[DocumentActivity]:
        cur = await self._conn.execute(
            "SELECT id, document_id, action, actor_id, occurred_at, comment, from_status, "
            "to_status, version_number FROM document_activity WHERE document_id = %s "
            "ORDER BY occurred_at, id",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [
            DocumentActivity(
                id=r[0],
                document_id=r[1],
                action=ActivityAction(r[2]),
                actor_id=r[3],
                occurred_at=r[4],
                comment=r[5],
                from_status=DocumentStatus.parse(r[6]) if r[6] else None,
                to_status=DocumentStatus.parse(r[7]) if r[7] else None,
                version_number=r[8],
            )
            for r in rows
        ]
