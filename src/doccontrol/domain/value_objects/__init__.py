"""Domain value objects."""

from doccontrol.domain.value_objects.activity_action import ActivityAction
from doccontrol.domain.value_objects.capability import Capability
from doccontrol.domain.value_objects.document_lock import DocumentLock
from doccontrol.domain.value_objects.document_status import (
    LOCKABLE_STATUSES,
    READ_ONLY_METADATA_STATUSES,
    TERMINAL_STATUSES,
    DocumentStatus,
)
from doccontrol.domain.value_objects.notification_kind import NotificationKind
from doccontrol.domain.value_objects.notification_schedule import (
    DEFAULT_NOTIFICATION_DAYS,
    NotificationSchedule,
)
from doccontrol.domain.value_objects.permission_level import PermissionLevel

__all__ = [
    "DEFAULT_NOTIFICATION_DAYS",
    "LOCKABLE_STATUSES",
    "READ_ONLY_METADATA_STATUSES",
    "TERMINAL_STATUSES",
    "ActivityAction",
    "Capability",
    "DocumentLock",
    "DocumentStatus",
    "NotificationKind",
    "NotificationSchedule",
    "PermissionLevel",
]
