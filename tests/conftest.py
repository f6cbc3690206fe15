"""Pytest configuration and fixtures for guestmenu.

Env is set before guestmenu.main is imported so create_app() sees valid
settings. Firebase is never contacted: the store, identity and token
dependencies are replaced with the in-memory fakes from tests.fakes.
"""

import json
import os

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("FIREBASE_SERVICE_ACCOUNT_KEY", json.dumps({"project_id": "test-project"}))
os.environ.setdefault("BOOTSTRAP_SUPERADMIN_UID", "root-admin")
os.environ.setdefault("BOOTSTRAP_SUPERADMIN_EMAIL", "guestmenu0@gmail.com")
os.environ.setdefault("ORDER_EVENT_SECRET", "test-order-event-secret")

from guestmenu.api.v1.dependencies import (  # noqa: E402
    get_document_store,
    get_identity_store,
    get_mail_transport,
    get_token_verifier,
)
from guestmenu.application.dtos.user import CallerIdentity, IdentityRecord  # noqa: E402
from guestmenu.application.services import AuthorizationGuard  # noqa: E402
from guestmenu.core.config import get_settings  # noqa: E402
from tests.fakes import (  # noqa: E402
    BOOTSTRAP_EMAIL,
    BOOTSTRAP_UID,
    FakeTokenVerifier,
    InMemoryDocumentStore,
    InMemoryIdentityStore,
    RecordingMailTransport,
)

get_settings.cache_clear()


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def identity_store() -> InMemoryIdentityStore:
    """Bootstrap admin (no claims), a claimed superadmin, a host and a guest."""
    return InMemoryIdentityStore(
        [
            IdentityRecord(uid=BOOTSTRAP_UID, email=BOOTSTRAP_EMAIL),
            IdentityRecord(uid="admin-2", email="admin2@example.com", custom_claims={"role": "superadmin"}),
            IdentityRecord(
                uid="host-1",
                email="host1@example.com",
                custom_claims={"role": "host", "subdomain": "pizza-roma"},
            ),
            IdentityRecord(uid="guest-1", email="guest1@example.com", custom_claims={"role": "guest"}),
        ]
    )


@pytest.fixture
def guard(identity_store: InMemoryIdentityStore) -> AuthorizationGuard:
    return AuthorizationGuard(identity_store, bootstrap_uid=BOOTSTRAP_UID, bootstrap_email=BOOTSTRAP_EMAIL)


@pytest.fixture
def token_verifier() -> FakeTokenVerifier:
    return FakeTokenVerifier(
        {
            "token-root": CallerIdentity(uid=BOOTSTRAP_UID, email=BOOTSTRAP_EMAIL),
            "token-admin": CallerIdentity(uid="admin-2", email="admin2@example.com"),
            "token-host": CallerIdentity(uid="host-1", email="host1@example.com"),
            "token-guest": CallerIdentity(uid="guest-1", email="guest1@example.com"),
        }
    )


@pytest.fixture
def mail_transport() -> RecordingMailTransport:
    return RecordingMailTransport()


@pytest.fixture
def app(
    document_store: InMemoryDocumentStore,
    identity_store: InMemoryIdentityStore,
    token_verifier: FakeTokenVerifier,
    mail_transport: RecordingMailTransport,
):
    """The FastAPI app with Firebase-backed dependencies replaced by fakes."""
    from guestmenu.main import app as fastapi_app

    fastapi_app.dependency_overrides[get_document_store] = lambda: document_store
    fastapi_app.dependency_overrides[get_identity_store] = lambda: identity_store
    fastapi_app.dependency_overrides[get_token_verifier] = lambda: token_verifier
    fastapi_app.dependency_overrides[get_mail_transport] = lambda: mail_transport
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
