"""Unit tests for expiry settings and the expiry sweep."""

from datetime import datetime, timedelta

import pytest

from doccontrol.application.dto.expiry_dto import ExpirySettingsInput
from doccontrol.application.use_cases.document.get_document import GetDocumentUseCase
from doccontrol.application.use_cases.expiry.expiry_sweep import SYSTEM_ACTOR, ExpirySweepUseCase
from doccontrol.application.use_cases.expiry.set_expiry_settings import SetExpirySettingsUseCase
from doccontrol.application.use_cases.lifecycle.submit_for_approval import (
    SubmitForApprovalUseCase,
)
from doccontrol.application.use_cases.locking.checkout_document import CheckoutDocumentUseCase
from doccontrol.domain.exceptions import Locked, PreconditionFailed, ValidationError
from doccontrol.domain.value_objects import (
    ActivityAction,
    DocumentLock,
    DocumentStatus,
    NotificationSchedule,
)

from tests.conftest import NOW, make_document


@pytest.mark.asyncio
async def test_past_expiry_reads_expired_and_blocks_mutations(
    store, uow_factory, clock, grant_checker
) -> None:
    doc = make_document(store, status=DocumentStatus.PUBLISHED)
    await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
        "owner", doc.id, ExpirySettingsInput(expiry_date=NOW - timedelta(days=1))
    )

    out = await GetDocumentUseCase(uow_factory, grant_checker, clock).execute("owner", doc.id)
    assert out.status is DocumentStatus.EXPIRED
    assert out.days_until_expiry == -1
    assert store.documents[doc.id].status is DocumentStatus.PUBLISHED

    with pytest.raises(PreconditionFailed):
        await CheckoutDocumentUseCase(uow_factory, grant_checker, clock).execute("owner", doc.id)


@pytest.mark.asyncio
async def test_expiry_settings_can_extend_lazily_expired_document(
    store, uow_factory, clock, grant_checker
) -> None:
    doc = make_document(store, expiry_date=NOW - timedelta(days=3))

    out = await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
        "owner", doc.id, ExpirySettingsInput(expiry_date=NOW + timedelta(days=30))
    )

    assert out.status is DocumentStatus.DRAFT
    assert out.days_until_expiry == 30
    out = await SubmitForApprovalUseCase(uow_factory, grant_checker, clock).execute(
        "owner", doc.id
    )
    assert out.status is DocumentStatus.PENDING_APPROVAL


@pytest.mark.asyncio
async def test_naive_expiry_date_is_treated_as_utc(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)

    out = await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
        "owner", doc.id, ExpirySettingsInput(expiry_date=datetime(2025, 6, 1))
    )

    assert out.expiry_date.utcoffset() == timedelta(0)
    assert store.documents[doc.id].last_action == "Expiry set to 2025-06-01"


@pytest.mark.asyncio
async def test_notifications_require_a_date(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)
    use_case = SetExpirySettingsUseCase(uow_factory, grant_checker, clock)

    with pytest.raises(ValidationError):
        await use_case.execute("owner", doc.id, ExpirySettingsInput(expiry_date=None))

    out = await use_case.execute(
        "owner", doc.id, ExpirySettingsInput(expiry_date=None, notifications_enabled=False)
    )
    assert out.expiry_date is None
    assert store.documents[doc.id].last_action == "Expiry cleared"


@pytest.mark.asyncio
async def test_disabled_notifications_store_empty_schedule(
    store, uow_factory, clock, grant_checker, sink
) -> None:
    doc = make_document(store)
    await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
        "owner",
        doc.id,
        ExpirySettingsInput(
            expiry_date=NOW + timedelta(days=10),
            notification_days=[30],
            notifications_enabled=False,
        ),
    )

    assert store.documents[doc.id].custom_notification_days == []
    report = await ExpirySweepUseCase(uow_factory, clock, sink).execute()
    assert report.warned == {}
    assert sink.events == []


@pytest.mark.asyncio
async def test_custom_days_are_normalized(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)

    out = await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
        "owner",
        doc.id,
        ExpirySettingsInput(expiry_date=NOW + timedelta(days=100), notification_days=[7, 30, 7]),
    )

    assert out.notification_days == [30, 7]

    with pytest.raises(ValidationError):
        await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
            "owner",
            doc.id,
            ExpirySettingsInput(expiry_date=NOW + timedelta(days=100), notification_days=[0]),
        )


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [DocumentStatus.ARCHIVED, DocumentStatus.EXPIRED])
async def test_expiry_settings_frozen_in_terminal_statuses(
    store, uow_factory, clock, grant_checker, status
) -> None:
    doc = make_document(store, status=status)

    with pytest.raises(PreconditionFailed):
        await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
            "owner", doc.id, ExpirySettingsInput(expiry_date=NOW + timedelta(days=5))
        )


@pytest.mark.asyncio
async def test_expiry_settings_blocked_by_foreign_lock(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store, lock=DocumentLock("u2", NOW))

    with pytest.raises(Locked):
        await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
            "owner", doc.id, ExpirySettingsInput(expiry_date=NOW + timedelta(days=5))
        )


@pytest.mark.asyncio
async def test_sweep_expires_and_releases_lock_once(store, uow_factory, clock, sink) -> None:
    doc = make_document(
        store,
        status=DocumentStatus.PUBLISHED,
        expiry_date=NOW - timedelta(hours=1),
        lock=DocumentLock("u2", NOW - timedelta(days=1)),
    )
    sweep = ExpirySweepUseCase(uow_factory, clock, sink)

    report = await sweep.execute()

    stored = store.documents[doc.id]
    assert report.expired == [doc.id]
    assert stored.status is DocumentStatus.EXPIRED
    assert stored.lock is None
    activity = store.activities[-1]
    assert activity.action is ActivityAction.EXPIRE
    assert activity.actor_id == SYSTEM_ACTOR
    assert activity.comment == "Lock held by u2 released"
    assert sink.kinds() == ["expired"]
    assert sink.events[0].payload["released_lock_holder"] == "u2"

    again = await sweep.execute()
    assert again.is_empty
    assert len(store.activities) == 1
    assert sink.kinds() == ["expired"]


@pytest.mark.asyncio
async def test_sweep_warns_once_per_crossed_threshold(store, uow_factory, clock, sink) -> None:
    doc = make_document(store, expiry_date=NOW + timedelta(days=45))
    sweep = ExpirySweepUseCase(uow_factory, clock, sink)

    first = await sweep.execute()
    second = await sweep.execute()
    clock.advance(days=20)
    third = await sweep.execute()

    assert first.warned == {doc.id: [60, 90]}
    assert second.warned == {}
    assert third.warned == {doc.id: [30]}
    assert sink.kinds() == ["expiration_warning", "expiration_warning"]
    assert sink.events[0].payload["thresholds"] == [60, 90]
    assert sink.events[0].payload["days_until_expiry"] == 45
    assert sorted(r.due_in_days for r in store.notifications) == [30, 60, 90]


@pytest.mark.asyncio
async def test_sweep_uses_configured_default_schedule(store, uow_factory, clock, sink) -> None:
    doc = make_document(store, expiry_date=NOW + timedelta(days=5))

    report = await ExpirySweepUseCase(
        uow_factory, clock, sink, default_schedule=NotificationSchedule.of([7, 1])
    ).execute()

    assert report.warned == {doc.id: [7]}


@pytest.mark.asyncio
async def test_new_expiry_date_rearms_reminders(store, uow_factory, clock, grant_checker, sink) -> None:
    doc = make_document(store, expiry_date=NOW + timedelta(days=20))
    sweep = ExpirySweepUseCase(uow_factory, clock, sink)
    await sweep.execute()
    assert [r.due_in_days for r in store.notifications] == [30, 60, 90]

    await SetExpirySettingsUseCase(uow_factory, grant_checker, clock).execute(
        "owner", doc.id, ExpirySettingsInput(expiry_date=NOW + timedelta(days=40))
    )
    assert store.notifications == []

    report = await sweep.execute()
    assert report.warned == {doc.id: [60, 90]}


@pytest.mark.asyncio
async def test_sweep_ignores_documents_without_expiry(store, uow_factory, clock, sink) -> None:
    make_document(store)
    make_document(store, status=DocumentStatus.ARCHIVED, expiry_date=NOW - timedelta(days=1))

    report = await ExpirySweepUseCase(uow_factory, clock, sink).execute()

    assert report.is_empty
    assert sink.events == []
