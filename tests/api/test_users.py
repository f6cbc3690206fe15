"""API tests for the superadmin-only user endpoints (role, delete, role-info)."""

import pytest
from httpx import AsyncClient

from tests.fakes import BOOTSTRAP_UID, InMemoryDocumentStore, InMemoryIdentityStore, bearer, seed_tenant


async def test_set_role_requires_token(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/role", json={"uid": "guest-1", "role": "host"})
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "unauthenticated"
    assert body["message"] == "User must be authenticated to set user roles."


async def test_invalid_token_is_unauthenticated(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/users/role", json={"uid": "guest-1", "role": "guest"}, headers=bearer("forged")
    )
    assert response.status_code == 401
    assert response.json()["error"] == "unauthenticated"


@pytest.mark.parametrize("token", ["token-host", "token-guest"])
async def test_set_role_by_non_superadmin_is_forbidden(client: AsyncClient, token: str) -> None:
    response = await client.post(
        "/api/v1/users/role", json={"uid": "guest-1", "role": "superadmin"}, headers=bearer(token)
    )
    assert response.status_code == 403
    assert response.json()["error"] == "permission-denied"


async def test_set_role_host(client: AsyncClient, identity_store: InMemoryIdentityStore) -> None:
    response = await client.post(
        "/api/v1/users/role",
        json={"uid": "guest-1", "role": "host", "subdomain": "pizza-roma"},
        headers=bearer("token-admin"),
    )
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "User role set to host for pizza-roma",
        "role": "host",
        "subdomain": "pizza-roma",
    }
    assert identity_store.users["guest-1"].custom_claims == {"role": "host", "subdomain": "pizza-roma"}


async def test_set_role_missing_uid(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/role", json={"role": "guest"}, headers=bearer("token-root"))
    assert response.status_code == 400
    assert response.json()["error"] == "invalid-argument"
    assert response.json()["message"] == "User ID is required."


async def test_set_role_host_without_subdomain(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/users/role", json={"uid": "guest-1", "role": "host"}, headers=bearer("token-root")
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Subdomain is required for host role."


async def test_demoting_bootstrap_is_forbidden(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/users/role", json={"uid": BOOTSTRAP_UID, "role": "guest"}, headers=bearer("token-admin")
    )
    assert response.status_code == 403


async def test_set_role_store_failure_is_internal(
    client: AsyncClient, identity_store: InMemoryIdentityStore
) -> None:
    identity_store.fail_set_claims = True
    response = await client.post(
        "/api/v1/users/role", json={"uid": "guest-1", "role": "guest"}, headers=bearer("token-root")
    )
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "internal"
    assert body["message"] == "Failed to set user role."
    assert body["details"]["reason"] == "quota exceeded"


async def test_delete_user_cascade(
    client: AsyncClient,
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
) -> None:
    seed_tenant(document_store, "host-1", categories=3, items=5, submissions=1, subdomain="pizza-roma")

    response = await client.post("/api/v1/users/delete", json={"uid": "host-1"}, headers=bearer("token-root"))

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "User deleted successfully."}
    assert document_store.docs == {}
    assert "host-1" not in identity_store.users


async def test_delete_bootstrap_is_forbidden(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/delete", json={"uid": BOOTSTRAP_UID}, headers=bearer("token-admin"))
    assert response.status_code == 403
    assert response.json()["message"] == "Cannot delete super admin user."


async def test_delete_commit_failure_keeps_user(
    client: AsyncClient,
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
) -> None:
    seed_tenant(document_store, "host-1", items=2)
    document_store.fail_commit = True

    response = await client.post("/api/v1/users/delete", json={"uid": "host-1"}, headers=bearer("token-root"))

    assert response.status_code == 500
    assert response.json()["details"]["reason"] == "Commit aborted"
    assert "host-1" in identity_store.users
    assert "menus/host-1/items/i0" in document_store.docs


async def test_delete_by_guest_is_forbidden(client: AsyncClient, identity_store: InMemoryIdentityStore) -> None:
    response = await client.post("/api/v1/users/delete", json={"uid": "host-1"}, headers=bearer("token-guest"))
    assert response.status_code == 403
    assert "host-1" in identity_store.users


async def test_role_info(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/role-info", json={"uid": "host-1"}, headers=bearer("token-admin"))
    assert response.status_code == 200
    assert response.json() == {"role": "host", "subdomain": "pizza-roma"}


async def test_role_info_defaults_to_guest(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/users/role-info", json={"uid": BOOTSTRAP_UID}, headers=bearer("token-root")
    )
    assert response.json() == {"role": "guest", "subdomain": None}


async def test_role_info_requires_superadmin(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/role-info", json={"uid": "host-1"}, headers=bearer("token-host"))
    assert response.status_code == 403
    assert response.json()["message"] == "Only super admins can get user role info."


async def test_set_role_without_token_or_body_is_unauthenticated(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/role")
    assert response.status_code == 401
    assert response.json()["error"] == "unauthenticated"


async def test_delete_with_bad_body_by_guest_is_forbidden(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/delete", json={"uid": 123}, headers=bearer("token-guest"))
    assert response.status_code == 403
    assert response.json()["error"] == "permission-denied"


async def test_role_info_with_non_object_body_by_host_is_forbidden(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/role-info", json=["guest-1"], headers=bearer("token-host"))
    assert response.status_code == 403


async def test_bad_body_from_superadmin_is_invalid_argument(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/delete", json={"uid": 123}, headers=bearer("token-admin"))
    assert response.status_code == 400
    assert response.json()["error"] == "invalid-argument"


async def test_unparseable_body_from_superadmin_is_invalid_argument(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/users/role",
        content=b"{not json",
        headers={**bearer("token-root"), "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "invalid-argument"


async def test_empty_body_from_superadmin_reports_missing_uid(client: AsyncClient) -> None:
    response = await client.post("/api/v1/users/role-info", headers=bearer("token-root"))
    assert response.status_code == 400
    assert response.json()["message"] == "User ID is required."
