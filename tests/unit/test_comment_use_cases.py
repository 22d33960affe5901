"""Unit tests for document comments."""

import copy

import pytest

from doccontrol.application.use_cases.comment.add_comment import (
    MAX_COMMENT_LENGTH,
    AddCommentUseCase,
)
from doccontrol.application.use_cases.comment.list_comments import ListCommentsUseCase
from doccontrol.domain.exceptions import NotFound, PermissionDenied, ValidationError
from doccontrol.domain.value_objects import (
    ActivityAction,
    DocumentLock,
    DocumentStatus,
    PermissionLevel,
)

from tests.conftest import NOW, grant, make_document


@pytest.mark.asyncio
async def test_add_comment_and_list_in_order(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)
    grant(store, doc.id, "reader", PermissionLevel.READ)
    add = AddCommentUseCase(uow_factory, grant_checker, clock)

    first = await add.execute("owner", doc.id, "  Please check section 3  ", "Olga Owner")
    clock.advance(minutes=5)
    await add.execute("reader", doc.id, "Section 3 looks fine")

    comments = await ListCommentsUseCase(uow_factory, grant_checker).execute("reader", doc.id)
    assert [c.content for c in comments] == ["Please check section 3", "Section 3 looks fine"]
    assert [c.author_name for c in comments] == ["Olga Owner", "reader"]
    assert first.created_at == NOW
    assert [a.action for a in store.activities] == [ActivityAction.COMMENT] * 2


@pytest.mark.asyncio
async def test_comment_leaves_document_untouched(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store, status=DocumentStatus.ARCHIVED)
    locked = make_document(store, lock=DocumentLock("u2", NOW))
    before = copy.deepcopy(store.documents)
    add = AddCommentUseCase(uow_factory, grant_checker, clock)

    await add.execute("owner", doc.id, "Superseded by SOP-2")
    await add.execute("owner", locked.id, "Waiting for u2")

    assert store.documents == before
    assert len(store.comments) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   ", "x" * (MAX_COMMENT_LENGTH + 1)])
async def test_add_comment_rejects_bad_content(
    store, uow_factory, clock, grant_checker, content
) -> None:
    doc = make_document(store)

    with pytest.raises(ValidationError):
        await AddCommentUseCase(uow_factory, grant_checker, clock).execute(
            "owner", doc.id, content
        )
    assert store.comments == []


@pytest.mark.asyncio
async def test_comments_require_read_access(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)

    with pytest.raises(PermissionDenied):
        await AddCommentUseCase(uow_factory, grant_checker, clock).execute(
            "stranger", doc.id, "hello"
        )
    with pytest.raises(PermissionDenied):
        await ListCommentsUseCase(uow_factory, grant_checker).execute("stranger", doc.id)


@pytest.mark.asyncio
async def test_comment_on_deleted_document_is_not_found(
    store, uow_factory, clock, grant_checker
) -> None:
    doc = make_document(store, deleted_at=NOW)

    with pytest.raises(NotFound):
        await AddCommentUseCase(uow_factory, grant_checker, clock).execute(
            "owner", doc.id, "hello"
        )
