"""Domain events handed to the notification sink."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from doccontrol.domain.value_objects import NotificationKind


@dataclass(frozen=True)
class DomainEvent:
    """Something notification consumers may care about."""

    document_id: UUID
    kind: NotificationKind
    occurred_at: datetime
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "document_id": str(self.document_id),
            "kind": self.kind.value,
            "occurred_at": self.occurred_at.isoformat(),
            "payload": self.payload,
        }
