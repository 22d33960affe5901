"""Unit tests for expiry calculations, reminder schedules and locks."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from doccontrol.domain.entities import Document
from doccontrol.domain.exceptions import ValidationError
from doccontrol.domain.expiry import (
    days_until_expiry,
    due_thresholds,
    effective_status,
    is_expired,
    notification_instants,
)
from doccontrol.domain.value_objects import DocumentLock, DocumentStatus, NotificationSchedule

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class TestDaysUntilExpiry:
    def test_ten_days(self) -> None:
        assert days_until_expiry(NOW, NOW + timedelta(days=10)) == 10

    def test_one_day_ago(self) -> None:
        assert days_until_expiry(NOW, NOW - timedelta(days=1)) == -1

    def test_partial_day_rounds_up(self) -> None:
        assert days_until_expiry(NOW, NOW + timedelta(hours=1)) == 1

    def test_now_is_zero_and_expired(self) -> None:
        assert days_until_expiry(NOW, NOW) == 0
        assert is_expired(NOW, NOW)

    def test_no_expiry_date_never_expires(self) -> None:
        assert not is_expired(NOW, None)


def _doc(status: DocumentStatus, expiry: datetime | None) -> Document:
    return Document(
        id=uuid4(),
        title="t",
        category="c",
        status=status,
        current_version=1,
        file_name="f",
        file_size=1,
        file_type="text/plain",
        file_path="p",
        created_by="u",
        created_at=NOW,
        updated_at=NOW,
        expiry_date=expiry,
    )


def test_effective_status_past_expiry_is_expired() -> None:
    doc = _doc(DocumentStatus.PUBLISHED, NOW - timedelta(days=1))
    assert effective_status(doc, NOW) is DocumentStatus.EXPIRED


def test_effective_status_archived_stays_archived() -> None:
    doc = _doc(DocumentStatus.ARCHIVED, NOW - timedelta(days=1))
    assert effective_status(doc, NOW) is DocumentStatus.ARCHIVED


def test_effective_status_future_expiry_unchanged() -> None:
    doc = _doc(DocumentStatus.DRAFT, NOW + timedelta(days=3))
    assert effective_status(doc, NOW) is DocumentStatus.DRAFT


def test_notification_instants_sorted_and_future_only() -> None:
    expiry = NOW + timedelta(days=45)
    schedule = NotificationSchedule.default()

    assert notification_instants(expiry, schedule) == [
        expiry - timedelta(days=90),
        expiry - timedelta(days=60),
        expiry - timedelta(days=30),
    ]
    assert notification_instants(expiry, schedule, NOW) == [expiry - timedelta(days=30)]


def test_due_thresholds_skip_fired() -> None:
    expiry = NOW + timedelta(days=25)
    schedule = NotificationSchedule.default()

    assert due_thresholds(NOW, expiry, schedule) == [30, 60, 90]
    assert due_thresholds(NOW, expiry, schedule, already_fired=[60, 90]) == [30]


def test_due_thresholds_empty_once_expired() -> None:
    assert due_thresholds(NOW, NOW - timedelta(days=1), NotificationSchedule.default()) == []


class TestNotificationSchedule:
    def test_default(self) -> None:
        assert NotificationSchedule.default().days == (90, 60, 30)

    def test_add_existing_is_noop(self) -> None:
        schedule = NotificationSchedule.of([30, 60])
        assert schedule.add(30) == schedule
        assert len(schedule.add(7)) == 3

    def test_remove(self) -> None:
        assert 30 not in NotificationSchedule.of([30, 60]).remove(30)

    def test_duplicates_collapse(self) -> None:
        assert NotificationSchedule.of([7, 7, 14]).days == (14, 7)

    @pytest.mark.parametrize("bad", [0, -1, True, "7", 1.5])
    def test_rejects_non_positive_integers(self, bad) -> None:
        with pytest.raises(ValidationError):
            NotificationSchedule.of([bad])


class TestDocumentLock:
    def test_never_stale_without_lease(self) -> None:
        lock = DocumentLock("u1", NOW - timedelta(days=365))
        assert not lock.is_stale(NOW, None)

    def test_stale_after_lease(self) -> None:
        lock = DocumentLock("u1", NOW - timedelta(hours=2))
        assert lock.is_stale(NOW, timedelta(hours=1))
        assert not lock.is_stale(NOW, timedelta(hours=3))

    def test_is_held_by(self) -> None:
        assert DocumentLock("u1", NOW).is_held_by("u1")
        assert not DocumentLock("u1", NOW).is_held_by("u2")
