"""Domain exceptions."""

from uuid import UUID


class DocControlError(Exception):
    """Base exception for doccontrol.

    Carries the guard that failed and the document state observed when it failed,
    so callers can decide whether to refresh and retry.
    """

    guard = "error"

    def __init__(
        self,
        message: str,
        *,
        document_id: UUID | None = None,
        current_status: str | None = None,
        lock_holder: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.document_id = document_id
        self.current_status = current_status
        self.lock_holder = lock_holder

    def to_dict(self) -> dict[str, object]:
        return {
            "error": self.message,
            "guard": self.guard,
            "document_id": str(self.document_id) if self.document_id else None,
            "status": self.current_status,
            "lock_holder": self.lock_holder,
        }


class NotFound(DocControlError):
    """Requested resource was not found."""

    guard = "not_found"

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class PreconditionFailed(DocControlError):
    """Status or version guard violated (stale read, concurrent transition)."""

    guard = "precondition"


class LockError(DocControlError):
    """Base for lock manager violations."""

    guard = "lock"


class Locked(LockError):
    """Document is checked out by another user."""

    guard = "locked"


class AlreadyLocked(LockError):
    """Checkout requested while another user holds the lock."""

    guard = "already_locked"


class NotLockedByCaller(LockError):
    """Check-in requested by a user who does not hold the lock."""

    guard = "not_locked_by_caller"


class PermissionDenied(DocControlError):
    """User does not have permission for the requested action."""

    guard = "permission"


class ValidationError(DocControlError):
    """Validation failed for input data."""

    guard = "validation"


class StorageUnavailable(DocControlError):
    """Blob store call failed."""

    guard = "storage"
