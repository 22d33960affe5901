"""PostgreSQL document repository implementation."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from psycopg import AsyncConnection

from doccontrol.application.ports.repositories import DocumentFilters, ExpectedState
from doccontrol.domain.entities import Document
from doccontrol.domain.value_objects import DocumentLock, DocumentStatus

_COLUMNS = (
    "id, title, description, category, status, current_version, file_name, file_size, "
    "file_type, file_path, created_by, created_at, updated_at, expiry_date, "
    "custom_notification_days, lock_holder_id, locked_at, tags, approved_by, approved_at, "
    "rejection_reason, last_action, pending_since, deleted_at"
)

_TERMINAL = tuple(s.value for s in (DocumentStatus.ARCHIVED, DocumentStatus.EXPIRED))


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        title=r[1],
        description=r[2],
        category=r[3],
        status=DocumentStatus.parse(r[4]),
        current_version=r[5],
        file_name=r[6],
        file_size=r[7],
        file_type=r[8],
        file_path=r[9],
        created_by=r[10],
        created_at=r[11],
        updated_at=r[12],
        expiry_date=r[13],
        custom_notification_days=list(r[14]) if r[14] is not None else None,
        lock=DocumentLock(holder_id=r[15], acquired_at=r[16]) if r[15] else None,
        tags=list(r[17] or []),
        approved_by=r[18],
        approved_at=r[19],
        rejection_reason=r[20],
        last_action=r[21],
        pending_since=r[22],
        deleted_at=r[23],
    )


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID, include_deleted: bool = False) -> Document | None:
        """Get document by id."""
        q = f"SELECT {_COLUMNS} FROM document WHERE id = %s"
        if not include_deleted:
            q += " AND deleted_at IS NULL"
        cur = await self._conn.execute(q, (document_id,))
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_document(r)

    async def list(
        self,
        *,
        readable_by: str | None = None,
        filters: DocumentFilters | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Document], str | None]:
        """List live documents with cursor pagination.

        readable_by restricts the result to documents the user holds a grant on.
        """
        conditions = ["deleted_at IS NULL"]
        _params: list[object] = []
        if readable_by is not None:
            conditions.append(
                "EXISTS (SELECT 1 FROM document_access a "
                "WHERE a.document_id = document.id AND a.user_id = %s)"
            )
            _params.append(readable_by)
        if filters:
            if filters.categories:
                conditions.append("category = ANY(%s)")
                _params.append(list(filters.categories))
            if filters.statuses and filters.as_of is not None:
                conditions.append(
                    "(CASE WHEN NOT (status = ANY(%s)) AND expiry_date IS NOT NULL "
                    "AND expiry_date <= %s THEN %s ELSE status END) = ANY(%s)"
                )
                _params.extend(
                    [
                        list(_TERMINAL),
                        filters.as_of,
                        DocumentStatus.EXPIRED.value,
                        [s.value for s in filters.statuses],
                    ]
                )
            elif filters.statuses:
                conditions.append("status = ANY(%s)")
                _params.append([s.value for s in filters.statuses])
            if filters.tags:
                conditions.append("tags @> %s")
                _params.append(list(filters.tags))
            if filters.created_by:
                conditions.append("created_by = ANY(%s)")
                _params.append(list(filters.created_by))
            if filters.search_term:
                conditions.append("(title ILIKE %s OR description ILIKE %s)")
                pattern = f"%{filters.search_term}%"
                _params.extend([pattern, pattern])
            if filters.expiring_before:
                conditions.append("expiry_date IS NOT NULL AND expiry_date <= %s")
                _params.append(filters.expiring_before)
        if cursor:
            conditions.append("id > %s")
            _params.append(UUID(cursor))
        where = " WHERE " + " AND ".join(conditions)
        params = tuple(_params) + (limit + 1,)
        q = f"SELECT {_COLUMNS} FROM document{where} ORDER BY id LIMIT %s"
        cur = await self._conn.execute(q, params)
        rows = await cur.fetchall()
        docs = [_row_to_document(r) for r in rows[:limit]]
        next_cursor = str(rows[limit - 1][0]) if len(rows) > limit else None
        return docs, next_cursor

    async def list_with_expiry(self) -> list[Document]:
        """Live, non-terminal documents that have an expiry date."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document "
            "WHERE deleted_at IS NULL AND expiry_date IS NOT NULL AND NOT (status = ANY(%s)) "
            "ORDER BY expiry_date",
            (list(_TERMINAL),),
        )
        rows = await cur.fetchall()
        return [_row_to_document(r) for r in rows]

    async def create(self, document: Document) -> Document:
        """Create document."""
        await self._conn.execute(
            f"INSERT INTO document ({_COLUMNS}) VALUES ({', '.join(['%s'] * 24)})",
            (
                document.id,
                document.title,
                document.description,
                document.category,
                document.status.value,
                document.current_version,
                document.file_name,
                document.file_size,
                document.file_type,
                document.file_path,
                document.created_by,
                document.created_at,
                document.updated_at,
                document.expiry_date,
                document.custom_notification_days,
                document.lock_holder,
                _locked_at(document),
                document.tags,
                document.approved_by,
                document.approved_at,
                document.rejection_reason,
                document.last_action,
                document.pending_since,
                document.deleted_at,
            ),
        )
        return document

    async def update_if(self, document: Document, expected: ExpectedState) -> bool:
        """Write every mutable column if the stored row still matches expected.

        Returns False when another transaction changed status, version or lock first.
        """
        cur = await self._conn.execute(
            "UPDATE document SET title=%s, description=%s, category=%s, status=%s, "
            "current_version=%s, file_name=%s, file_size=%s, file_type=%s, file_path=%s, "
            "updated_at=%s, expiry_date=%s, custom_notification_days=%s, lock_holder_id=%s, "
            "locked_at=%s, tags=%s, approved_by=%s, approved_at=%s, rejection_reason=%s, "
            "last_action=%s, pending_since=%s, deleted_at=%s "
            "WHERE id=%s AND deleted_at IS NULL AND status=%s AND current_version=%s "
            "AND lock_holder_id IS NOT DISTINCT FROM %s",
            (
                document.title,
                document.description,
                document.category,
                document.status.value,
                document.current_version,
                document.file_name,
                document.file_size,
                document.file_type,
                document.file_path,
                document.updated_at,
                document.expiry_date,
                document.custom_notification_days,
                document.lock_holder,
                _locked_at(document),
                document.tags,
                document.approved_by,
                document.approved_at,
                document.rejection_reason,
                document.last_action,
                document.pending_since,
                document.deleted_at,
                document.id,
                expected.status.value,
                expected.current_version,
                expected.lock_holder_id,
            ),
        )
        return cur.rowcount == 1


def _locked_at(document: Document) -> datetime | None:
    return document.lock.acquired_at if document.lock else None
