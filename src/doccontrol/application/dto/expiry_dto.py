"""Expiry DTOs."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass
class ExpirySettingsInput:
    """Expiry settings. notification_days None means the platform default schedule."""

    expiry_date: datetime | None
    notification_days: list[int] | None = None
    notifications_enabled: bool = True


@dataclass
class SweepReport:
    """What one expiry sweep changed."""

    expired: list[UUID] = field(default_factory=list)
    warned: dict[UUID, list[int]] = field(default_factory=dict)
    skipped: list[UUID] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.expired or self.warned)
