"""PostgreSQL document access repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from doccontrol.domain.entities import DocumentAccess
from doccontrol.domain.value_objects import PermissionLevel


def _row_to_access(r: tuple) -> DocumentAccess:
    return DocumentAccess(
        id=r[0],
        document_id=r[1],
        user_id=r[2],
        permission_level=PermissionLevel(r[3]),
        granted_by=r[4],
        granted_at=r[5],
    )


class PostgresAccessRepository:
    """Access grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_for_document(self, document_id: UUID, user_id: str) -> DocumentAccess | None:
        """Get the grant of user on document."""
        cur = await self._conn.execute(
            "SELECT id, document_id, user_id, permission_level, granted_by, granted_at "
            "FROM document_access WHERE document_id = %s AND user_id = %s",
            (document_id, user_id),
        )
        r = await cur.fetchone()
        return _row_to_access(r) if r else None

    async def list_by_document(self, document_id: UUID) -> list[DocumentAccess]:
        """List grants on document."""
        cur = await self._conn.execute(
            "SELECT id, document_id, user_id, permission_level, granted_by, granted_at "
            "FROM document_access WHERE document_id = %s ORDER BY granted_at",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_access(r) for r in rows]

    async def upsert(self, access: DocumentAccess) -> DocumentAccess:
        """Insert grant, or replace the level of the existing (document, user) grant."""
        cur = await self._conn.execute(
            "INSERT INTO document_access "
            "(id, document_id, user_id, permission_level, granted_by, granted_at) "
            "VALUES (%s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (document_id, user_id) DO UPDATE SET "
            "permission_level = EXCLUDED.permission_level, "
            "granted_by = EXCLUDED.granted_by, granted_at = EXCLUDED.granted_at "
            "RETURNING id, document_id, user_id, permission_level, granted_by, granted_at",
            (
                access.id,
                access.document_id,
                access.user_id,
                access.permission_level.value,
                access.granted_by,
                access.granted_at,
            ),
        )
        r = await cur.fetchone()
        return _row_to_access(r)

    async def delete(self, access_id: UUID) -> None:
        await self._conn.execute("DELETE FROM document_access WHERE id = %s", (access_id,))
