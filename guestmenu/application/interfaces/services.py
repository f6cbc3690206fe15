"""Service interfaces (ports) for the application layer.

Protocols define contracts for the managed backends the services call (DIP).
Paths are relative to the database root, e.g. 'menus/u1/items/i3'.
"""

from __future__ import annotations

from typing import Any, Protocol

from guestmenu.application.dtos.order import OrderNotification
from guestmenu.application.dtos.user import CallerIdentity, IdentityRecord


class IDocumentStore(Protocol):
    """Hierarchical document store (Firestore)."""

    async def get(self, path: str) -> dict[str, Any] | None:
        """Return document data, or None when the document does not exist."""

    async def exists(self, path: str) -> bool:
        """Return True if the document exists."""

    async def set(self, path: str, data: dict[str, Any]) -> None:
        """Create or overwrite a document."""

    async def list_documents(self, collection_path: str) -> list[str]:
        """Return paths of every document directly in the collection."""

    async def find_by_field(self, collection_path: str, field: str, value: Any) -> list[str]:
        """Return paths of every document in the collection whose field equals value."""

    async def delete_all(self, paths: list[str]) -> None:
        """Delete every path in one atomic commit (all or nothing)."""


class IIdentityStore(Protocol):
    """User directory with custom claims (Firebase Auth)."""

    async def get_user(self, uid: str) -> IdentityRecord:
        """Return the record; raise UserNotFoundException if the uid is unknown."""

    async def set_custom_claims(self, uid: str, claims: dict[str, Any] | None) -> None:
        """Replace the user's claims entirely."""

    async def delete_user(self, uid: str) -> None:
        """Delete the user record."""


class ITokenVerifier(Protocol):
    """Turns a bearer token into a verified caller."""

    async def verify(self, token: str) -> CallerIdentity:
        """Raise UnauthenticatedException when the token is not valid."""


class IMailTransport(Protocol):
    """Outbound email."""

    async def send(self, to: str, subject: str, html: str, text: str) -> None:
        """Send one message with HTML and plain-text alternatives."""


class IOrderRenderer(Protocol):
    """Renders the new-order email."""

    def render(self, order: OrderNotification) -> tuple[str, str, str]:
        """Return (subject, html, text)."""
