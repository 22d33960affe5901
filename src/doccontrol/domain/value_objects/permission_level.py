"""Permission level stored on a document access grant."""

from enum import StrEnum

from doccontrol.domain.value_objects.capability import Capability


class PermissionLevel(StrEnum):
    """Grant level. Each level includes the capabilities of the levels below it."""

    READ = "read"
    WRITE = "write"
    APPROVE = "approve"
    ADMIN = "admin"

    @property
    def capabilities(self) -> frozenset[Capability]:
        return _CAPABILITIES[self]


_CAPABILITIES: dict[PermissionLevel, frozenset[Capability]] = {
    PermissionLevel.READ: frozenset({Capability.READ}),
    PermissionLevel.WRITE: frozenset({Capability.READ, Capability.WRITE}),
    PermissionLevel.APPROVE: frozenset(
        {Capability.READ, Capability.WRITE, Capability.APPROVE}
    ),
    PermissionLevel.ADMIN: frozenset(Capability),
}
