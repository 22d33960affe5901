"""PostgreSQL version ledger repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from doccontrol.domain.entities import DocumentVersion

_COLUMNS = (
    "id, document_id, version_number, file_name, file_size, file_type, blob_locator, "
    "created_by, created_at, change_notes"
)


def _row_to_version(r: tuple) -> DocumentVersion:
    return DocumentVersion(
        id=r[0],
        document_id=r[1],
        version_number=r[2],
        file_name=r[3],
        file_size=r[4],
        file_type=r[5],
        blob_locator=r[6],
        created_by=r[7],
        created_at=r[8],
        change_notes=r[9],
    )


class PostgresVersionRepository:
    """Append-only. The unique (document_id, version_number) index rejects duplicate appends."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def append(self, version: DocumentVersion) -> DocumentVersion:
        await self._conn.execute(
            f"INSERT INTO document_version ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                version.id,
                version.document_id,
                version.version_number,
                version.file_name,
                version.file_size,
                version.file_type,
                version.blob_locator,
                version.created_by,
                version.created_at,
                version.change_notes,
            ),
        )
        return version

    async def get(self, document_id: UUID, version_number: int) -> DocumentVersion | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_version "
            "WHERE document_id = %s AND version_number = %s",
            (document_id, version_number),
        )
        r = await cur.fetchone()
        return _row_to_version(r) if r else None

    async def list_by_document(self, document_id: UUID) -> list[DocumentVersion]:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document_version WHERE document_id = %s "
            "ORDER BY version_number",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_version(r) for r in rows]

    async def count_by_document(self, document_id: UUID) -> int:
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM document_version WHERE document_id = %s",
            (document_id,),
        )
        r = await cur.fetchone()
        return r[0] if r else 0
