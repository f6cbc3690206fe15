"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the Firebase-backed stores and the
application services. Routes depend only on these dependencies, not on
infrastructure directly. Tests replace the store dependencies through
app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from guestmenu.application.dtos.user import CallerIdentity
from guestmenu.application.interfaces.services import (
    IDocumentStore,
    IIdentityStore,
    IMailTransport,
    IOrderRenderer,
    ITokenVerifier,
)
from guestmenu.application.services import (
    AuthorizationGuard,
    OrderNotificationService,
    RoleAssignmentService,
    SubdomainRegistryService,
    TenantDeletionService,
)
from guestmenu.core.config import get_settings
from guestmenu.infrastructure.external.email import create_mail_transport
from guestmenu.infrastructure.firebase import FirebaseClients, get_firebase_clients
from guestmenu.infrastructure.firebase.repositories import FirestoreDocumentStore
from guestmenu.infrastructure.services import OrderTemplateRenderer

_http_bearer = HTTPBearer(auto_error=False)


def get_clients() -> FirebaseClients:
    """Firebase clients created at startup; 503 when credentials were not usable."""
    clients = get_firebase_clients()
    if clients is None:
        raise HTTPException(
            status_code=503,
            detail="Firebase is not configured. Check FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH.",
        )
    return clients


def get_document_store(
    clients: Annotated[FirebaseClients, Depends(get_clients)],
) -> IDocumentStore:
    return FirestoreDocumentStore(clients.firestore)


def get_identity_store(
    clients: Annotated[FirebaseClients, Depends(get_clients)],
) -> IIdentityStore:
    return clients.identity


def get_token_verifier(
    clients: Annotated[FirebaseClients, Depends(get_clients)],
) -> ITokenVerifier:
    return clients.token_verifier


def get_mail_transport() -> IMailTransport:
    return create_mail_transport(get_settings())


def get_order_renderer() -> IOrderRenderer:
    return OrderTemplateRenderer()


async def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    verifier: Annotated[ITokenVerifier, Depends(get_token_verifier)],
) -> CallerIdentity | None:
    """Verified caller from the Bearer ID token, or None when no token was sent.

    A token that is present but invalid raises UnauthenticatedException.
    Whether None is acceptable is up to the service.
    """
    if not credentials:
        return None
    return await verifier.verify(credentials.credentials)


def get_authorization_guard(
    identity_store: Annotated[IIdentityStore, Depends(get_identity_store)],
) -> AuthorizationGuard:
    settings = get_settings()
    return AuthorizationGuard(
        identity_store,
        bootstrap_uid=settings.bootstrap_superadmin_uid,
        bootstrap_email=settings.bootstrap_superadmin_email,
    )


def get_role_service(
    identity_store: Annotated[IIdentityStore, Depends(get_identity_store)],
    guard: Annotated[AuthorizationGuard, Depends(get_authorization_guard)],
) -> RoleAssignmentService:
    return RoleAssignmentService(identity_store, guard)


def get_tenant_deletion_service(
    document_store: Annotated[IDocumentStore, Depends(get_document_store)],
    identity_store: Annotated[IIdentityStore, Depends(get_identity_store)],
    guard: Annotated[AuthorizationGuard, Depends(get_authorization_guard)],
) -> TenantDeletionService:
    return TenantDeletionService(document_store, identity_store, guard)


def get_subdomain_service(
    document_store: Annotated[IDocumentStore, Depends(get_document_store)],
) -> SubdomainRegistryService:
    return SubdomainRegistryService(document_store)


def get_order_notification_service(
    document_store: Annotated[IDocumentStore, Depends(get_document_store)],
    mail_transport: Annotated[IMailTransport, Depends(get_mail_transport)],
    renderer: Annotated[IOrderRenderer, Depends(get_order_renderer)],
) -> OrderNotificationService:
    return OrderNotificationService(document_store, mail_transport, renderer)
