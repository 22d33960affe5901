"""Capabilities checked by the permission port."""

from enum import StrEnum


class Capability(StrEnum):
    """Actions a user can be allowed to perform on a document."""

    READ = "read"
    WRITE = "write"
    APPROVE = "approve"
    ADMIN = "admin"
