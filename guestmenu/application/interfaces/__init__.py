"""Application ports (Protocols) implemented by infrastructure."""

from guestmenu.application.interfaces.services import (
    IDocumentStore,
    IIdentityStore,
    IMailTransport,
    IOrderRenderer,
    ITokenVerifier,
)

__all__ = [
    "IDocumentStore",
    "IIdentityStore",
    "IMailTransport",
    "IOrderRenderer",
    "ITokenVerifier",
]
