"""DTOs for identity, authorization and role use cases (no dependency on transport)."""

from dataclasses import dataclass, field
from typing import Any

from guestmenu.domain.enums import UserRole


@dataclass(frozen=True)
class CallerIdentity:
    """Principal proven by a verified ID token. Carries no privilege by itself."""

    uid: str
    email: str | None = None


@dataclass(frozen=True)
class IdentityRecord:
    """User record as stored in the identity directory."""

    uid: str
    email: str | None = None
    custom_claims: dict[str, Any] = field(default_factory=dict)
    disabled: bool = False


@dataclass(frozen=True)
class AuthorizationContext:
    """Result of a successful authorization check, built fresh for one request.

    Never cached or reused across requests; role reflects the identity store at
    the time of the check.
    """

    uid: str
    email: str | None
    role: UserRole
    is_bootstrap: bool = False


@dataclass(frozen=True)
class RoleInfo:
    """Effective role and subdomain of a user."""

    role: UserRole
    subdomain: str | None = None


@dataclass(frozen=True)
class RoleAssignmentResult:
    """Outcome of setUserRole."""

    role: UserRole
    subdomain: str | None
    message: str
    success: bool = True


@dataclass(frozen=True)
class DeletionResult:
    """Outcome of deleteUser."""

    uid: str
    documents_deleted: int
    message: str = "User deleted successfully."
    success: bool = True
