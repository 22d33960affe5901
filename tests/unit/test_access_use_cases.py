"""Unit tests for access grants and the activity log."""

import pytest

from doccontrol.application.use_cases.access.grant_access import GrantAccessUseCase
from doccontrol.application.use_cases.access.list_access import ListAccessUseCase
from doccontrol.application.use_cases.access.revoke_access import RevokeAccessUseCase
from doccontrol.application.use_cases.activity.list_activities import ListActivitiesUseCase
from doccontrol.application.use_cases.locking.checkout_document import CheckoutDocumentUseCase
from doccontrol.domain.exceptions import NotFound, PermissionDenied, ValidationError
from doccontrol.domain.value_objects import ActivityAction, PermissionLevel

from tests.conftest import grant, make_document


@pytest.mark.asyncio
async def test_grant_replaces_existing_grant(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)
    use_case = GrantAccessUseCase(uow_factory, grant_checker, clock)

    first = await use_case.execute("owner", doc.id, "u2", "read")
    second = await use_case.execute("owner", doc.id, "u2", PermissionLevel.WRITE)

    grants = await ListAccessUseCase(uow_factory, grant_checker).execute("owner", doc.id)
    assert second.id == first.id
    assert sorted(g.user_id for g in grants) == ["owner", "u2"]
    assert store.access[(doc.id, "u2")].permission_level is PermissionLevel.WRITE
    assert [a.comment for a in store.activities] == ["Granted read to u2", "Granted write to u2"]


@pytest.mark.asyncio
@pytest.mark.parametrize("grantee, level", [("", "read"), ("u2", "owner"), ("u2", "")])
async def test_grant_rejects_bad_input(store, uow_factory, clock, grant_checker, grantee, level) -> None:
    doc = make_document(store)

    with pytest.raises(ValidationError):
        await GrantAccessUseCase(uow_factory, grant_checker, clock).execute(
            "owner", doc.id, grantee, level
        )


@pytest.mark.asyncio
async def test_managing_access_requires_admin(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)
    grant(store, doc.id, "approver", PermissionLevel.APPROVE)

    with pytest.raises(PermissionDenied):
        await GrantAccessUseCase(uow_factory, grant_checker, clock).execute(
            "approver", doc.id, "u3", "admin"
        )
    with pytest.raises(PermissionDenied):
        await RevokeAccessUseCase(uow_factory, grant_checker, clock).execute(
            "approver", doc.id, "owner"
        )
    with pytest.raises(PermissionDenied):
        await ListAccessUseCase(uow_factory, grant_checker).execute("approver", doc.id)


@pytest.mark.asyncio
async def test_revoke_removes_capabilities(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)
    grant(store, doc.id, "u2", PermissionLevel.WRITE)

    await RevokeAccessUseCase(uow_factory, grant_checker, clock).execute("owner", doc.id, "u2")

    assert (doc.id, "u2") not in store.access
    assert store.activities[-1].action is ActivityAction.REVOKE_ACCESS
    with pytest.raises(PermissionDenied):
        await CheckoutDocumentUseCase(uow_factory, grant_checker, clock).execute("u2", doc.id)


@pytest.mark.asyncio
async def test_revoke_missing_grant(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)

    with pytest.raises(NotFound):
        await RevokeAccessUseCase(uow_factory, grant_checker, clock).execute(
            "owner", doc.id, "nobody"
        )
    assert store.activities == []


@pytest.mark.asyncio
async def test_activities_are_listed_in_order(store, uow_factory, clock, grant_checker) -> None:
    doc = make_document(store)
    checkout = CheckoutDocumentUseCase(uow_factory, grant_checker, clock)
    clock.advance(minutes=5)
    await GrantAccessUseCase(uow_factory, grant_checker, clock).execute(
        "owner", doc.id, "reader", "read"
    )
    clock.advance(minutes=5)
    await checkout.execute("owner", doc.id)

    activities = await ListActivitiesUseCase(uow_factory, grant_checker).execute("reader", doc.id)

    assert [a.action for a in activities] == [ActivityAction.GRANT_ACCESS, ActivityAction.CHECKOUT]
    assert activities[0].occurred_at < activities[1].occurred_at
