"""Version ledger and lock DTOs."""

from dataclasses import dataclass


@dataclass
class VersionDetails:
    """New content supplied on check-in."""

    content: bytes
    file_name: str
    file_type: str
    change_notes: str | None = None


@dataclass
class CheckinInput:
    """Check-in options. version_details is required when create_new_version is set."""

    create_new_version: bool = False
    version_details: VersionDetails | None = None
