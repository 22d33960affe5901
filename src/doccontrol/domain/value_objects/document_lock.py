"""Checkout lock held on a document."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class DocumentLock:
    """Exclusive edit right on a document."""

    holder_id: str
    acquired_at: datetime

    def is_held_by(self, user_id: str) -> bool:
        return self.holder_id == user_id

    def is_stale(self, now: datetime, lease: timedelta | None) -> bool:
        """True when a lease is configured and has run out. Without a lease locks never go stale."""
        if lease is None:
            return False
        return now - self.acquired_at >= lease
