"""Tests for TenantDeletionService (ordered, atomic deleteUser cascade)."""

import pytest

from guestmenu.application.dtos.user import AuthorizationContext
from guestmenu.application.services import (
    AuthorizationGuard,
    DeleteSet,
    TenantDeletionService,
    flatten_delete_sets,
)
from guestmenu.domain.enums import UserRole
from guestmenu.domain.exceptions import (
    InternalException,
    InvalidArgumentException,
    PermissionDeniedException,
)
from tests.fakes import BOOTSTRAP_UID, InMemoryDocumentStore, InMemoryIdentityStore, seed_tenant

ADMIN_CTX = AuthorizationContext(uid="admin-2", email="admin2@example.com", role=UserRole.SUPERADMIN)


@pytest.fixture
def deletion_service(
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
    guard: AuthorizationGuard,
) -> TenantDeletionService:
    return TenantDeletionService(document_store, identity_store, guard)


def _owned_by(store: InMemoryDocumentStore, uid: str) -> list[str]:
    return [
        p
        for p, data in store.docs.items()
        if p.split("/")[1] == uid or data.get("userId") == uid
    ]


async def test_full_tenant_is_removed_in_one_commit(
    deletion_service: TenantDeletionService,
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
) -> None:
    seed_tenant(document_store, "host-1", categories=3, items=5, submissions=1, subdomain="pizza-roma")
    document_store.docs["publicMenus/pm-1"] = {"userId": "host-1", "title": "Menu"}
    seed_tenant(document_store, "guest-1", items=2, subdomain="other-place")

    result = await deletion_service.delete_tenant_user(ADMIN_CTX, "host-1")

    assert result.success is True
    assert result.message == "User deleted successfully."
    assert _owned_by(document_store, "host-1") == []
    assert "host-1" not in identity_store.users
    assert len(document_store.commits) == 1
    # users root + profile, menus root + 3 + 5, submissions root + 1, subdomain, public menu
    assert result.documents_deleted == 2 + 9 + 2 + 1 + 1
    # another tenant is untouched
    assert "menus/guest-1/items/i1" in document_store.docs
    assert "subdomains/other-place" in document_store.docs


async def test_commit_order_follows_steps(
    deletion_service: TenantDeletionService, document_store: InMemoryDocumentStore
) -> None:
    seed_tenant(document_store, "host-1", categories=1, items=1, submissions=1, subdomain="pizza-roma")
    document_store.docs["publicMenus/pm-1"] = {"userId": "host-1"}

    await deletion_service.delete_tenant_user(ADMIN_CTX, "host-1")

    prefixes = [p.split("/")[0] for p in document_store.commits[0]]
    order = ["users", "menus", "submissions", "subdomains", "publicMenus"]
    assert prefixes == sorted(prefixes, key=order.index)
    assert len(set(document_store.commits[0])) == len(document_store.commits[0])


async def test_subcollections_skipped_when_root_missing(
    deletion_service: TenantDeletionService, document_store: InMemoryDocumentStore
) -> None:
    """Orphaned subcollection documents under a missing root are not visited."""
    document_store.docs["menus/host-1/items/i0"] = {"name": "orphan"}

    plan = await deletion_service.plan("host-1")

    assert plan == []


async def test_failed_commit_leaves_everything_intact(
    deletion_service: TenantDeletionService,
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
) -> None:
    seed_tenant(document_store, "host-1", categories=3, items=5, submissions=1, subdomain="pizza-roma")
    before = dict(document_store.docs)
    document_store.fail_commit = True

    with pytest.raises(InternalException) as exc_info:
        await deletion_service.delete_tenant_user(ADMIN_CTX, "host-1")

    assert exc_info.value.message == "Failed to delete user."
    assert exc_info.value.reason == "Commit aborted"
    assert document_store.docs == before
    assert "host-1" in identity_store.users


async def test_failed_planning_read_leaves_identity(
    deletion_service: TenantDeletionService,
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
) -> None:
    seed_tenant(document_store, "host-1", items=1)
    document_store.fail_reads = True
    with pytest.raises(InternalException):
        await deletion_service.delete_tenant_user(ADMIN_CTX, "host-1")
    assert document_store.commits == []
    assert "host-1" in identity_store.users


async def test_identity_deletion_failure_after_commit_is_internal(
    deletion_service: TenantDeletionService,
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
) -> None:
    seed_tenant(document_store, "host-1", items=1)
    identity_store.fail_delete = True
    with pytest.raises(InternalException):
        await deletion_service.delete_tenant_user(ADMIN_CTX, "host-1")
    assert _owned_by(document_store, "host-1") == []


async def test_bootstrap_cannot_be_deleted(
    deletion_service: TenantDeletionService,
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
) -> None:
    seed_tenant(document_store, BOOTSTRAP_UID, items=1)
    with pytest.raises(PermissionDeniedException) as exc_info:
        await deletion_service.delete_tenant_user(ADMIN_CTX, BOOTSTRAP_UID)
    assert exc_info.value.message == "Cannot delete super admin user."
    assert document_store.commits == []
    assert BOOTSTRAP_UID in identity_store.users


async def test_missing_uid(deletion_service: TenantDeletionService) -> None:
    with pytest.raises(InvalidArgumentException):
        await deletion_service.delete_tenant_user(ADMIN_CTX, None)


async def test_unknown_target_is_internal(deletion_service: TenantDeletionService) -> None:
    with pytest.raises(InternalException):
        await deletion_service.delete_tenant_user(ADMIN_CTX, "ghost")


async def test_user_without_tenant_data(
    deletion_service: TenantDeletionService,
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
) -> None:
    result = await deletion_service.delete_tenant_user(ADMIN_CTX, "guest-1")
    assert result.documents_deleted == 0
    assert identity_store.deleted == ["guest-1"]


def test_flatten_delete_sets_dedupes_in_order() -> None:
    sets = [
        DeleteSet(step="users", paths=("users/u", "users/u/profile/data")),
        DeleteSet(step="subdomains", paths=("subdomains/a", "users/u")),
    ]
    assert flatten_delete_sets(sets) == ["users/u", "users/u/profile/data", "subdomains/a"]
