"""Document lifecycle status."""

import re
from enum import StrEnum

from doccontrol.domain.exceptions import ValidationError

_SEPARATORS = re.compile(r"[\s\-]+")


class DocumentStatus(StrEnum):
    """Lifecycle status of a document. The value is the canonical serialization."""

    DRAFT = "draft"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    PUBLISHED = "published"
    REJECTED = "rejected"
    ARCHIVED = "archived"
    EXPIRED = "expired"

    @classmethod
    def parse(cls, raw: str) -> "DocumentStatus":
        """Parse a stored status, accepting legacy spellings.

        "Pending Approval", "Pending_Approval" and "pending-approval" all map to
        PENDING_APPROVAL.
        """
        normalized = _SEPARATORS.sub("_", (raw or "").strip()).lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValidationError(f"Unknown document status: {raw!r}") from None

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def is_lockable(self) -> bool:
        return self in LOCKABLE_STATUSES


TERMINAL_STATUSES = frozenset({DocumentStatus.ARCHIVED, DocumentStatus.EXPIRED})

# A document may only be checked out in these statuses.
LOCKABLE_STATUSES = frozenset(
    {
        DocumentStatus.DRAFT,
        DocumentStatus.PENDING_APPROVAL,
        DocumentStatus.APPROVED,
        DocumentStatus.PUBLISHED,
    }
)

# Metadata is read-only in these statuses.
READ_ONLY_METADATA_STATUSES = frozenset(
    {DocumentStatus.ARCHIVED, DocumentStatus.EXPIRED, DocumentStatus.PUBLISHED}
)
