"""PostgreSQL document comment repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from doccontrol.domain.entities import DocumentComment


class PostgresCommentRepository:
    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def add(self, comment: DocumentComment) -> DocumentComment:
        await self._conn.execute(
            "INSERT INTO document_comment "
            "(id, document_id, author_id, author_name, content, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            (
                comment.id,
                comment.document_id,
                comment.author_id,
                comment.author_name,
                comment.content,
                comment.created_at,
            ),
        )
        return comment

    async def list_by_document(self, document_id: UUID) -> list[DocumentComment]:
        cur = await self._conn.execute(
            "SELECT id, document_id, author_id, author_name, content, created_at "
            "FROM document_comment WHERE document_id = %s ORDER BY created_at, id",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [
            DocumentComment(
                id=r[0],
                document_id=r[1],
                author_id=r[2],
                author_name=r[3],
                content=r[4],
                created_at=r[5],
            )
            for r in rows
        ]
