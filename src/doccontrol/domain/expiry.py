"""Expiry calculations. All functions are pure; the caller supplies the clock."""

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from doccontrol.domain.entities import Document
from doccontrol.domain.value_objects import DocumentStatus, NotificationSchedule

ONE_DAY = timedelta(days=1)


def days_until_expiry(now: datetime, expiry_date: datetime) -> int:
    """Whole days left, rounded up. Negative means expired, zero means it expires today."""
    return math.ceil((expiry_date - now) / ONE_DAY)


def is_expired(now: datetime, expiry_date: datetime | None) -> bool:
    if expiry_date is None:
        return False
    return days_until_expiry(now, expiry_date) <= 0


def effective_status(document: Document, now: datetime) -> DocumentStatus:
    """Status with expiry applied, whether or not the sweep has persisted it yet."""
    if not document.status.is_terminal and is_expired(now, document.expiry_date):
        return DocumentStatus.EXPIRED
    return document.status


def notification_instants(
    expiry_date: datetime,
    schedule: NotificationSchedule,
    now: datetime | None = None,
) -> list[datetime]:
    """Reminder instants (expiry minus each threshold), ascending; only future ones when now is given."""
    instants = sorted(expiry_date - timedelta(days=d) for d in schedule)
    if now is not None:
        instants = [i for i in instants if i > now]
    return instants


def due_thresholds(
    now: datetime,
    expiry_date: datetime,
    schedule: NotificationSchedule,
    already_fired: Iterable[int] = (),
) -> list[int]:
    """Thresholds crossed by now that have not fired yet, ascending. Empty once expired."""
    days_left = days_until_expiry(now, expiry_date)
    if days_left <= 0:
        return []
    fired = set(already_fired)
    return sorted(d for d in schedule if days_left <= d and d not in fired)
