"""Reminder thresholds (days before expiry)."""

from collections.abc import Iterable
from dataclasses import dataclass

from doccontrol.domain.exceptions import ValidationError

DEFAULT_NOTIFICATION_DAYS = (30, 60, 90)


@dataclass(frozen=True)
class NotificationSchedule:
    """Set of positive day offsets, kept sorted descending (furthest reminder first)."""

    days: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        for d in self.days:
            if isinstance(d, bool) or not isinstance(d, int) or d <= 0:
                raise ValidationError(f"Notification days must be positive integers, got {d!r}")
        object.__setattr__(self, "days", tuple(sorted(set(self.days), reverse=True)))

    @classmethod
    def of(cls, days: Iterable[int]) -> "NotificationSchedule":
        return cls(tuple(days))

    @classmethod
    def default(cls) -> "NotificationSchedule":
        return cls(DEFAULT_NOTIFICATION_DAYS)

    def add(self, day: int) -> "NotificationSchedule":
        """Add a threshold. Adding an existing day is a no-op."""
        if day in self.days:
            return self
        return NotificationSchedule(self.days + (day,))

    def remove(self, day: int) -> "NotificationSchedule":
        return NotificationSchedule(tuple(d for d in self.days if d != day))

    def __contains__(self, day: object) -> bool:
        return day in self.days

    def __iter__(self):
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)
