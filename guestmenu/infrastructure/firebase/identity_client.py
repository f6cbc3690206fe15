"""Firebase Auth user management over the Identity Toolkit REST API (no firebase-admin).

Covers the three operations the privileged functions need: look up a user,
replace its custom claims, delete it. Shares credentials with the Firestore
client; all calls go through httpx.AsyncClient.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from guestmenu.application.dtos.user import IdentityRecord
from guestmenu.domain.exceptions import UserNotFoundException
from guestmenu.infrastructure.exceptions import IdentityToolkitError
from guestmenu.infrastructure.firebase._rest_client import AccessTokenSource

logger = logging.getLogger(__name__)

_IDENTITY_BASE = "https://identitytoolkit.googleapis.com/v1"
# Firebase rejects custom claims larger than this once serialized.
MAX_CLAIMS_PAYLOAD_BYTES = 1000


def _to_record(raw: dict[str, Any]) -> IdentityRecord:
    claims_json = raw.get("customAttributes")
    claims: dict[str, Any] = {}
    if claims_json:
        try:
            parsed = json.loads(claims_json)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed customAttributes for user %s", raw.get("localId"))
        else:
            if isinstance(parsed, dict):
                claims = parsed
    return IdentityRecord(
        uid=raw.get("localId", ""),
        email=raw.get("email"),
        custom_claims=claims,
        disabled=bool(raw.get("disabled", False)),
    )


class IdentityToolkitClient:
    """Admin user operations for one Firebase project."""

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
        self._accounts = f"{_IDENTITY_BASE}/projects/{project_id}/accounts"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def _post(self, action: str, body: dict[str, Any], uid: str) -> dict[str, Any]:
        token = await self._tokens.get_token()
        try:
            resp = await self._http.post(
                f"{self._accounts}:{action}",
                headers={"Authorization": f"Bearer {token}"},
                json=body,
            )
        except httpx.HTTPError as e:
            raise IdentityToolkitError(f"Identity Toolkit request failed: {e}") from e
        if resp.status_code == 200:
            return resp.json() if resp.content else {}
        message = f"HTTP {resp.status_code}"
        try:
            message = resp.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            pass
        if message.startswith("USER_NOT_FOUND"):
            raise UserNotFoundException(uid)
        raise IdentityToolkitError(message, resp.status_code)

    async def get_user(self, uid: str) -> IdentityRecord:
        """Return the user's record; raise UserNotFoundException when the uid is unknown."""
        out = await self._post("lookup", {"localId": [uid]}, uid)
        users = out.get("users") or []
        if not users:
            raise UserNotFoundException(uid)
        return _to_record(users[0])

    async def set_custom_claims(self, uid: str, claims: dict[str, Any] | None) -> None:
        """Replace the user's custom claims with exactly `claims` (None clears them)."""
        payload = json.dumps(claims or {})
        if len(payload.encode("utf-8")) > MAX_CLAIMS_PAYLOAD_BYTES:
            raise IdentityToolkitError(
                f"Custom claims payload must not exceed {MAX_CLAIMS_PAYLOAD_BYTES} bytes"
            )
        await self._post("update", {"localId": uid, "customAttributes": payload}, uid)

    async def delete_user(self, uid: str) -> None:
        """Delete the identity record."""
        await self._post("delete", {"localId": uid}, uid)
