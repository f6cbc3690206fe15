"""Firestore-backed document store (implements IDocumentStore)."""

from __future__ import annotations

from typing import Any

from guestmenu.infrastructure.firebase._rest_client import FirestoreRESTClient


class FirestoreDocumentStore:
    """Path-oriented access to Firestore for the application services."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    def _collection(self, collection_path: str):
        parent, _, collection_id = collection_path.strip("/").rpartition("/")
        if not parent:
            return self._client.collection(collection_id)
        return self._client.document(parent).collection(collection_id)

    async def get(self, path: str) -> dict[str, Any] | None:
        """Return document data, or None if not found."""
        snapshot = await self._client.document(path).get()
        return snapshot.to_dict() if snapshot else None

    async def exists(self, path: str) -> bool:
        return await self._client.document(path).get() is not None

    async def set(self, path: str, data: dict[str, Any]) -> None:
        await self._client.document(path).set(data)

    async def list_documents(self, collection_path: str) -> list[str]:
        """Return relative paths of all documents in the collection (all pages)."""
        paths: list[str] = []
        async for snapshot in self._collection(collection_path).stream():
            paths.append(snapshot.reference.relative_path)
        return paths

    async def find_by_field(self, collection_path: str, field: str, value: Any) -> list[str]:
        """Return relative paths of documents where field == value (server-side filter)."""
        paths: list[str] = []
        query = self._collection(collection_path).where(field, "==", value)
        async for snapshot in query.stream():
            paths.append(snapshot.reference.relative_path)
        return paths

    async def delete_all(self, paths: list[str]) -> None:
        """Delete all paths in a single atomic commit."""
        batch = self._client.batch()
        for path in paths:
            batch.delete(self._client.document(path))
        await batch.commit()
