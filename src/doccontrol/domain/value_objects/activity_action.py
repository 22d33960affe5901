"""Activity log actions."""

from enum import StrEnum


class ActivityAction(StrEnum):
    """Kinds of entries written to the document activity log."""

    CREATE = "create"
    UPDATE = "update"
    SUBMIT = "submit"
    APPROVE = "approve"
    REJECT = "reject"
    PUBLISH = "publish"
    ARCHIVE = "archive"
    REOPEN = "reopen"
    CHECKOUT = "checkout"
    CHECKIN = "checkin"
    FORCE_UNLOCK = "force_unlock"
    REVERT = "revert"
    EXPIRY_SETTINGS = "expiry_settings"
    EXPIRE = "expire"
    GRANT_ACCESS = "grant_access"
    REVOKE_ACCESS = "revoke_access"
    COMMENT = "comment"
    DELETE = "delete"
