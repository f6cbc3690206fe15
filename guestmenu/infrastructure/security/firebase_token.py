"""Firebase ID token verification.

Tokens are RS256 JWTs signed by securetoken@system.gserviceaccount.com.
Signing certs are fetched from Google and reused until their Cache-Control
max-age runs out. Only the caller's uid and email are taken from the token;
role claims inside it are ignored (the guard re-reads them from the store).
"""

from __future__ import annotations

import re
import time

import httpx
from jose import ExpiredSignatureError, JWTError, jwt

from guestmenu.application.dtos.user import CallerIdentity
from guestmenu.domain.exceptions import UnauthenticatedException

CERTS_URL = (
    "https://www.googleapis.com/robot/v1/metadata/x509/"
    "securetoken@system.gserviceaccount.com"
)
_ISSUER_PREFIX = "https://securetoken.google.com/"
_MAX_AGE_RE = re.compile(r"max-age=(\d+)")
_DEFAULT_CERT_TTL = 3600


class FirebaseTokenVerifier:
    """Verifies ID tokens for one Firebase project."""

    def __init__(
        self,
        project_id: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        leeway_seconds: int = 5,
    ) -> None:
        self.project_id = project_id
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=10.0)
        self._owns_http = http_client is None
        self._leeway = leeway_seconds
        self._certs: dict[str, str] = {}
        self._certs_expire_at = 0.0

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def _get_certs(self) -> dict[str, str]:
        """Return kid -> PEM certificate; refetch after the advertised max-age."""
        if self._certs and time.monotonic() < self._certs_expire_at:
            return self._certs
        resp = await self._http.get(CERTS_URL)
        resp.raise_for_status()
        match = _MAX_AGE_RE.search(resp.headers.get("cache-control", ""))
        ttl = int(match.group(1)) if match else _DEFAULT_CERT_TTL
        self._certs = resp.json()
        self._certs_expire_at = time.monotonic() + ttl
        return self._certs

    async def verify(self, token: str) -> CallerIdentity:
        """Verify signature, audience, issuer and expiry; return the caller.

        Raises:
            UnauthenticatedException: If the token is missing, malformed, expired,
                or not issued for this project.
        """
        if not token:
            raise UnauthenticatedException()
        try:
            header = jwt.get_unverified_header(token)
        except JWTError:
            raise UnauthenticatedException("Malformed ID token.") from None
        if header.get("alg") != "RS256":
            raise UnauthenticatedException("ID token has an unexpected algorithm.")
        try:
            certs = await self._get_certs()
        except httpx.HTTPError as e:
            raise UnauthenticatedException(f"Could not fetch token signing keys: {e}") from e
        cert = certs.get(header.get("kid", ""))
        if cert is None:
            raise UnauthenticatedException("ID token has an unknown key id.")
        try:
            payload = jwt.decode(
                token,
                cert,
                algorithms=["RS256"],
                audience=self.project_id,
                issuer=f"{_ISSUER_PREFIX}{self.project_id}",
                options={"leeway": self._leeway},
            )
        except ExpiredSignatureError:
            raise UnauthenticatedException("ID token has expired.") from None
        except JWTError:
            raise UnauthenticatedException("Invalid ID token.") from None
        uid = payload.get("sub")
        if not isinstance(uid, str) or not uid or len(uid) > 128:
            raise UnauthenticatedException("ID token has an invalid subject.")
        return CallerIdentity(uid=uid, email=payload.get("email"))
