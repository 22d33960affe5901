"""Unit tests for GrantPermissionChecker."""

import pytest

from doccontrol.domain.value_objects import Capability, PermissionLevel

from tests.conftest import grant, make_document


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "level, allowed",
    [
        (PermissionLevel.READ, {Capability.READ}),
        (PermissionLevel.WRITE, {Capability.READ, Capability.WRITE}),
        (PermissionLevel.APPROVE, {Capability.READ, Capability.WRITE, Capability.APPROVE}),
        (PermissionLevel.ADMIN, set(Capability)),
    ],
)
async def test_levels_include_lower_capabilities(store, grant_checker, level, allowed) -> None:
    doc = make_document(store)
    grant(store, doc.id, "u2", level)

    for capability in Capability:
        assert await grant_checker.has_capability("u2", doc.id, capability) is (
            capability in allowed
        )


@pytest.mark.asyncio
async def test_no_grant_means_no_capability(store, grant_checker) -> None:
    doc = make_document(store)

    assert await grant_checker.has_capability("stranger", doc.id, Capability.READ) is False
