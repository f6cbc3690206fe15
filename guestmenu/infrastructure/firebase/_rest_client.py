"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
Keeps the deployment small (avoids grpcio / firebase-admin).
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any
import httpx

from guestmenu.infrastructure.exceptions import FirestoreError
from guestmenu.infrastructure.firebase._rest_encoding import (
    decode_document,
    encode_fields,
    encode_value,
)

FIREBASE_SCOPES = [
    "https://www.googleapis.com/auth/datastore",
    "https://www.googleapis.com/auth/identitytoolkit",
    "https://www.googleapis.com/auth/cloud-platform",
]
_BASE = "https://firestore.googleapis.com/v1"
_PAGE_SIZE = 300


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore and Identity Toolkit."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=FIREBASE_SCOPES
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class AccessTokenSource:
    """Service-account access token shared by every client built on one credential.

    google-auth credentials are not safe to refresh from several threads at
    once, so refreshes run one at a time; a valid token is returned without
    touching the worker pool.
    """

    def __init__(self, credentials) -> None:
        self._credentials = credentials
        self._lock = asyncio.Lock()

    async def get_token(self) -> str:
        if self._credentials.valid:
            return self._credentials.token
        async with self._lock:
            return await asyncio.to_thread(_get_access_token, self._credentials)


def _error_message(resp: httpx.Response) -> str:
    """Extract error.message from a Google API error body, else the raw text."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(body, list) and body:
        body = body[0]
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("message") or f"HTTP {resp.status_code}"
    return resp.text or f"HTTP {resp.status_code}"


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: dict | None = None,
) -> Any:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method not in ("GET", "PATCH", "POST", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    try:
        resp = await client.request(method, url, headers=headers, json=body, params=params)
    except httpx.HTTPError as e:
        raise FirestoreError(f"Firestore request failed: {e}") from e
    if resp.status_code == 404:
        return None
    if resp.status_code not in (200, 204):
        raise FirestoreError(_error_message(resp), resp.status_code)
    if method == "DELETE":
        return {}
    return resp.json() if resp.content else {}


class DocumentSnapshot:
    """Snapshot of a document (id + data + reference)."""

    def __init__(self, reference: DocumentReference, data: dict):
        self.reference = reference
        self.id = reference.id
        self._data = data

    def to_dict(self) -> dict:
        return self._data


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self.path = path

    @property
    def id(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def relative_path(self) -> str:
        """Path below the database root, e.g. 'users/u1/profile/data'."""
        return self.path[len(self._client.documents_root) + 1 :]

    def collection(self, collection_id: str) -> CollectionReference:
        """Subcollection under this document."""
        return CollectionReference(self._client, f"{self.path}/{collection_id}")

    async def set(self, data: dict[str, Any]) -> None:
        """Create or overwrite the document (PATCH with full replace)."""
        await _request_async(
            self._client._http,
            f"{_BASE}/{self.path}",
            method="PATCH",
            body={"fields": encode_fields(data)},
            access_token=await self._client.get_token(),
        )

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self.path}",
            access_token=await self._client.get_token(),
        )
        if out is None:
            return None
        return DocumentSnapshot(self, decode_document(out))


class _Query:
    """Single equality filter on a collection; runs via runQuery on the parent document."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        parent: str,
        collection_id: str,
        *,
        where_field: str,
        where_value: Any,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._where_field = where_field
        self._where_value = where_value

    def to_structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
            "where": {
                "fieldFilter": {
                    "field": {"fieldPath": self._where_field},
                    "op": "EQUAL",
                    "value": encode_value(self._where_value),
                }
            },
        }
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": self.to_structured_query()},
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            doc = item.get("document")
            if not doc:
                continue
            ref = DocumentReference(self._client, doc["name"])
            yield DocumentSnapshot(ref, decode_document(doc))


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self.path = path.rstrip("/")

    @property
    def id(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self.path}/{document_id}")

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start an equality query. Only "==" is supported. Run it with .stream()."""
        if op != "==":
            raise ValueError(f"Unsupported query operator: {op!r}")
        return _Query(
            self._client,
            self.path.rsplit("/", 1)[0],
            self.id,
            where_field=field,
            where_value=value,
        )

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection (shallow), following nextPageToken."""
        params: dict[str, Any] = {"pageSize": _PAGE_SIZE}
        while True:
            out = await _request_async(
                self._client._http,
                f"{_BASE}/{self.path}",
                access_token=await self._client.get_token(),
                params=params,
            )
            if not out:
                return
            for doc in out.get("documents", []):
                ref = DocumentReference(self._client, doc["name"])
                yield DocumentSnapshot(ref, decode_document(doc))
            token = out.get("nextPageToken")
            if not token:
                return
            params = {"pageSize": _PAGE_SIZE, "pageToken": token}


class WriteBatch:
    """Accumulates writes and applies them in one atomic commit."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._writes: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._writes)

    def delete(self, reference: DocumentReference) -> None:
        self._writes.append({"delete": reference.path})

    async def commit(self) -> None:
        """Apply all writes atomically; a no-op when the batch is empty."""
        if not self._writes:
            return
        await self._client.commit(self._writes)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        token_source: AccessTokenSource | None = None,
    ) -> None:
        self.project_id = project_id
        self._tokens = token_source if token_source is not None else AccessTokenSource(credentials)
        self.database_root = f"projects/{project_id}/databases/(default)"
        self.documents_root = f"{self.database_root}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in the thread pool, one at a time."""
        return await self._tokens.get_token()

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self.documents_root}/{collection_id}")

    def document(self, relative_path: str) -> DocumentReference:
        """Document by path below the database root (e.g. 'users/u1/profile/data')."""
        return DocumentReference(self, f"{self.documents_root}/{relative_path.strip('/')}")

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    async def commit(self, writes: list[dict[str, Any]]) -> None:
        """POST documents:commit. All writes apply or none do."""
        await _request_async(
            self._http,
            f"{_BASE}/{self.documents_root}:commit",
            method="POST",
            body={"writes": writes},
            access_token=await self.get_token(),
        )
