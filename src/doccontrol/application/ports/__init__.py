"""Application ports - interfaces for external adapters."""

from doccontrol.application.ports.blob_store import BlobStore
from doccontrol.application.ports.clock import Clock
from doccontrol.application.ports.notification_sink import NotificationSink
from doccontrol.application.ports.permission_checker import PermissionChecker
from doccontrol.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "BlobStore",
    "Clock",
    "NotificationSink",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
