"""Pytest fixtures for doccontrol tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from doccontrol.application.ports.repositories import DocumentFilters, ExpectedState
from doccontrol.domain.entities import (
    Document,
    DocumentAccess,
    DocumentActivity,
    DocumentComment,
    DocumentVersion,
    NotificationRecord,
)
from doccontrol.domain.events import DomainEvent
from doccontrol.domain.exceptions import StorageUnavailable
from doccontrol.domain.expiry import effective_status
from doccontrol.domain.value_objects import DocumentStatus, PermissionLevel

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


# --- In-memory store shared by every unit of work of a test ---


@dataclass
class FakeStore:
    documents: dict[UUID, Document] = field(default_factory=dict)
    versions: list[DocumentVersion] = field(default_factory=list)
    access: dict[tuple[UUID, str], DocumentAccess] = field(default_factory=dict)
    activities: list[DocumentActivity] = field(default_factory=list)
    comments: list[DocumentComment] = field(default_factory=list)
    notifications: list[NotificationRecord] = field(default_factory=list)


# --- Fake repositories ---


class FakeDocumentRepository:
    """In-memory document repository. Reads return copies, like rows fetched from a database."""

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_by_id(
        self, document_id: UUID, include_deleted: bool = False
    ) -> Document | None:
        doc = self._store.documents.get(document_id)
        if not doc or (not include_deleted and doc.deleted_at):
            return None
        return copy.deepcopy(doc)

    async def list(
        self,
        *,
        readable_by: str | None = None,
        filters: DocumentFilters | None = None,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Document], str | None]:
        items = [d for d in self._store.documents.values() if d.deleted_at is None]
        if readable_by is not None:
            items = [d for d in items if (d.id, readable_by) in self._store.access]
        f = filters or DocumentFilters()
        if f.categories:
            items = [d for d in items if d.category in f.categories]
        if f.statuses:
            items = [
                d
                for d in items
                if (effective_status(d, f.as_of) if f.as_of else d.status) in f.statuses
            ]
        if f.tags:
            items = [d for d in items if set(f.tags) <= set(d.tags)]
        if f.created_by:
            items = [d for d in items if d.created_by in f.created_by]
        if f.search_term:
            term = f.search_term.lower()
            items = [
                d
                for d in items
                if term in d.title.lower() or term in (d.description or "").lower()
            ]
        if f.expiring_before:
            items = [d for d in items if d.expiry_date and d.expiry_date <= f.expiring_before]
        items.sort(key=lambda d: d.id)
        if cursor:
            items = [d for d in items if d.id > UUID(cursor)]
        page = items[: limit + 1]
        next_cursor = str(page[limit - 1].id) if len(page) > limit else None
        return [copy.deepcopy(d) for d in page[:limit]], next_cursor

    async def list_with_expiry(self) -> list[Document]:
        return [
            copy.deepcopy(d)
            for d in self._store.documents.values()
            if d.deleted_at is None and d.expiry_date and not d.status.is_terminal
        ]

    async def create(self, document: Document) -> Document:
        self._store.documents[document.id] = copy.deepcopy(document)
        return document

    async def update_if(self, document: Document, expected: ExpectedState) -> bool:
        stored = self._store.documents.get(document.id)
        if stored is None or stored.deleted_at is not None or ExpectedState.of(stored) != expected:
            return False
        self._store.documents[document.id] = copy.deepcopy(document)
        return True


class FakeVersionRepository:
    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def append(self, version: DocumentVersion) -> DocumentVersion:
        if any(
            v.document_id == version.document_id and v.version_number == version.version_number
            for v in self._store.versions
        ):
            raise ValueError("duplicate version")
        self._store.versions.append(version)
        return version

    async def get(self, document_id: UUID, version_number: int) -> DocumentVersion | None:
        for v in self._store.versions:
            if v.document_id == document_id and v.version_number == version_number:
                return v
        return None

    async def list_by_document(self, document_id: UUID) -> list[DocumentVersion]:
        return sorted(
            (v for v in self._store.versions if v.document_id == document_id),
            key=lambda v: v.version_number,
        )

    async def count_by_document(self, document_id: UUID) -> int:
        return len([v for v in self._store.versions if v.document_id == document_id])


class FakeAccessRepository:
    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def get_for_document(self, document_id: UUID, user_id: str) -> DocumentAccess | None:
        return self._store.access.get((document_id, user_id))

    async def list_by_document(self, document_id: UUID) -> list[DocumentAccess]:
        return [a for (doc_id, _), a in self._store.access.items() if doc_id == document_id]

    async def upsert(self, access: DocumentAccess) -> DocumentAccess:
        self._store.access[(access.document_id, access.user_id)] = access
        return access

    async def delete(self, access_id: UUID) -> None:
        for key, a in list(self._store.access.items()):
            if a.id == access_id:
                del self._store.access[key]


class FakeActivityRepository:
    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def add(self, activity: DocumentActivity) -> DocumentActivity:
        self._store.activities.append(activity)
        return activity

    async def list_by_document(self, document_id: UUID) -> list[DocumentActivity]:
        return [a for a in self._store.activities if a.document_id == document_id]


class FakeCommentRepository:
    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def add(self, comment: DocumentComment) -> DocumentComment:
        self._store.comments.append(comment)
        return comment

    async def list_by_document(self, document_id: UUID) -> list[DocumentComment]:
        return [c for c in self._store.comments if c.document_id == document_id]


class FakeNotificationRepository:
    def __init__(self, store: FakeStore) -> None:
        self._store = store

    async def list_fired_days(self, document_id: UUID) -> list[int]:
        return [r.due_in_days for r in self._store.notifications if r.document_id == document_id]

    async def add(self, record: NotificationRecord) -> NotificationRecord:
        self._store.notifications.append(record)
        return record

    async def clear(self, document_id: UUID) -> None:
        self._store.notifications = [
            r for r in self._store.notifications if r.document_id != document_id
        ]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories over a shared store."""

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self.documents = FakeDocumentRepository(self.store)
        self.versions = FakeVersionRepository(self.store)
        self.access = FakeAccessRepository(self.store)
        self.activities = FakeActivityRepository(self.store)
        self.comments = FakeCommentRepository(self.store)
        self.notifications = FakeNotificationRepository(self.store)
        self.committed = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        pass


def make_uow_factory(store: FakeStore):
    """Factory whose units of work share store and roll it back when the block raises."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        snapshot = copy.deepcopy(store.__dict__)
        uow = FakeUnitOfWork(store)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            store.__dict__.clear()
            store.__dict__.update(snapshot)
            raise

    return factory


# --- Fake adapters ---


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


class FakeBlobStore:
    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.put_calls = 0

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        self.put_calls += 1
        self.objects[key] = data
        return key

    async def get(self, locator: str) -> bytes:
        return self.objects[locator]

    async def signed_url(self, locator: str, expires_in: int) -> str:
        return f"https://storage.test/{locator}?expires_in={expires_in}"


class FailingBlobStore(FakeBlobStore):
    """Raises StorageUnavailable for the first `failures` uploads."""

    def __init__(self, failures: int = 10**6) -> None:
        super().__init__()
        self.failures = failures

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        self.put_calls += 1
        if self.put_calls <= self.failures:
            raise StorageUnavailable("storage down")
        self.objects[key] = data
        return key


class RecordingSink:
    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    async def emit(self, event: DomainEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[str]:
        return [e.kind.value for e in self.events]


# --- Builders ---


def make_document(
    store: FakeStore,
    *,
    status: DocumentStatus = DocumentStatus.DRAFT,
    owner: str = "owner",
    versions: int = 1,
    now: datetime = NOW,
    **overrides: object,
) -> Document:
    """Put a document with `versions` ledger rows and an admin grant for owner into store."""
    doc_id = uuid4()
    for n in range(1, versions + 1):
        store.versions.append(
            DocumentVersion(
                id=uuid4(),
                document_id=doc_id,
                version_number=n,
                file_name=f"file-v{n}.pdf",
                file_size=100 * n,
                file_type="application/pdf",
                blob_locator=f"{doc_id}/v{n}/file-v{n}.pdf",
                created_by=owner,
                created_at=now,
                change_notes=None,
            )
        )
    fields: dict[str, object] = {
        "id": doc_id,
        "title": "SOP-1",
        "category": "SOP",
        "status": status,
        "current_version": versions,
        "file_name": f"file-v{versions}.pdf",
        "file_size": 100 * versions,
        "file_type": "application/pdf",
        "file_path": f"{doc_id}/v{versions}/file-v{versions}.pdf",
        "created_by": owner,
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    document = Document(**fields)
    store.documents[doc_id] = copy.deepcopy(document)
    grant(store, doc_id, owner, PermissionLevel.ADMIN)
    return document


def grant(store: FakeStore, document_id: UUID, user_id: str, level: PermissionLevel) -> None:
    store.access[(document_id, user_id)] = DocumentAccess(
        id=uuid4(),
        document_id=document_id,
        user_id=user_id,
        permission_level=level,
        granted_by="owner",
        granted_at=NOW,
    )


# --- Fixtures ---


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def uow_factory(store: FakeStore):
    return make_uow_factory(store)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - grants everything by default."""
    mock = AsyncMock()
    mock.has_capability.return_value = True
    return mock


@pytest.fixture
def grant_checker(uow_factory):
    """Real grant-based checker over the fake store."""
    from doccontrol.infrastructure.permission.permission_checker import GrantPermissionChecker

    return GrantPermissionChecker(uow_factory)
