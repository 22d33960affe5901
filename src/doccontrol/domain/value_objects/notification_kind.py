"""Kinds of events handed to the notification sink."""

from enum import StrEnum


class NotificationKind(StrEnum):
    APPROVAL_REQUEST = "approval_request"
    APPROVAL_COMPLETED = "approval_completed"
    REJECTION = "rejection"
    EXPIRATION_WARNING = "expiration_warning"
    EXPIRED = "expired"
