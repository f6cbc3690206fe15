"""Firebase clients (REST-based, no firebase-admin).

Initialized at app startup using either FIREBASE_SERVICE_ACCOUNT_KEY (JSON
string) or FIREBASE_SERVICE_ACCOUNT_PATH (file path). One service account
backs Firestore, Identity Toolkit and ID token verification.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

from guestmenu.core.config import get_settings  # noqa: E402
from guestmenu.infrastructure.firebase._rest_client import (  # noqa: E402
    AccessTokenSource,
    FirestoreRESTClient,
    _get_credentials,
)
from guestmenu.infrastructure.firebase.identity_client import (  # noqa: E402
    IdentityToolkitClient,
)
from guestmenu.infrastructure.security.firebase_token import (  # noqa: E402
    FirebaseTokenVerifier,
)


@dataclass
class FirebaseClients:
    """Process-wide Firebase clients sharing one credential."""

    project_id: str
    http: httpx.AsyncClient
    firestore: FirestoreRESTClient
    identity: IdentityToolkitClient
    token_verifier: FirebaseTokenVerifier


_clients: FirebaseClients | None = None


def _load_key_dict():
    """Return service account dict from env key or file path."""
    settings = get_settings()
    key_json = settings.firebase_service_account_key.get_secret_value() if settings.firebase_service_account_key else None
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def init_firebase() -> bool:
    """Create the Firestore, Identity Toolkit and token verifier clients.

    Idempotent if already initialized. On invalid credentials logs the
    exception and returns False; requests then fail with 503 until fixed.

    Returns:
        True if the clients were initialized, False otherwise.
    """
    global _clients
    if _clients is not None:
        return True
    try:
        key_dict = _load_key_dict()
        if not key_dict:
            return False

        project_id = key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return False

        settings = get_settings()
        cred = _get_credentials(key_dict)
        tokens = AccessTokenSource(cred)
        http = httpx.AsyncClient(timeout=settings.firebase_timeout_seconds)
        _clients = FirebaseClients(
            project_id=project_id,
            http=http,
            firestore=FirestoreRESTClient(project_id, cred, http_client=http, token_source=tokens),
            identity=IdentityToolkitClient(project_id, cred, http_client=http, token_source=tokens),
            token_verifier=FirebaseTokenVerifier(project_id, http_client=http),
        )
        logger.info(
            "Firebase clients initialized for project %s (timeout %.0fs)",
            project_id,
            settings.firebase_timeout_seconds,
        )
        return True
    except Exception:
        logger.exception("Firebase initialization failed")
        return False


def get_firebase_clients() -> FirebaseClients | None:
    """Return the Firebase clients, or None if not configured."""
    return _clients


async def close_firebase() -> None:
    """Close the shared HTTP connection pool. Call from app shutdown."""
    global _clients
    if _clients is not None:
        await _clients.http.aclose()
        _clients = None
        logger.info("Firebase HTTP clients closed")
