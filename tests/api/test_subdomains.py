"""API tests for the subdomain registry endpoints."""

from httpx import AsyncClient

from tests.fakes import InMemoryDocumentStore, bearer


async def test_availability_is_public(client: AsyncClient, document_store: InMemoryDocumentStore) -> None:
    document_store.docs["subdomains/pizza-roma"] = {"userId": "host-1"}

    taken = await client.get("/api/v1/subdomains/Pizza-Roma/availability")
    free = await client.get("/api/v1/subdomains/new-place/availability")

    assert taken.status_code == 200
    assert taken.json() == {"subdomain": "pizza-roma", "available": False}
    assert free.json() == {"subdomain": "new-place", "available": True}


async def test_availability_of_invalid_name(client: AsyncClient) -> None:
    response = await client.get("/api/v1/subdomains/ab/availability")
    assert response.status_code == 400
    assert response.json()["error"] == "invalid-argument"
    assert "at least 3 characters" in response.json()["message"]


async def test_register_requires_authentication(client: AsyncClient) -> None:
    response = await client.post("/api/v1/subdomains", json={"subdomain": "pizza-roma"})
    assert response.status_code == 401


async def test_register(client: AsyncClient, document_store: InMemoryDocumentStore) -> None:
    response = await client.post(
        "/api/v1/subdomains", json={"subdomain": "Pizza-Roma"}, headers=bearer("token-guest")
    )
    assert response.status_code == 201
    assert response.json() == {"subdomain": "pizza-roma", "user_id": "guest-1"}
    assert document_store.docs["subdomains/pizza-roma"]["userId"] == "guest-1"


async def test_register_taken_returns_409(client: AsyncClient, document_store: InMemoryDocumentStore) -> None:
    document_store.docs["subdomains/pizza-roma"] = {"userId": "host-1"}
    response = await client.post(
        "/api/v1/subdomains", json={"subdomain": "pizza-roma"}, headers=bearer("token-guest")
    )
    assert response.status_code == 409
    assert response.json()["error"] == "already-exists"
    assert document_store.docs["subdomains/pizza-roma"]["userId"] == "host-1"
