"""Domain value objects for GuestMenu.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

from guestmenu.domain.enums import UserRole

# DNS label: lowercase alphanumeric and hyphens.
_SUBDOMAIN_RE = re.compile(r"^[a-z0-9-]+$")
_SUBDOMAIN_STRIP_RE = re.compile(r"[^a-z0-9-]")

SUBDOMAIN_MIN_LENGTH = 3
SUBDOMAIN_MAX_LENGTH = 63


def normalize_subdomain(raw: str) -> str:
    """Lowercase and drop every character that is not a-z, 0-9 or '-'.

    This is what the onboarding form does to user input before checking it.
    """
    return _SUBDOMAIN_STRIP_RE.sub("", (raw or "").lower())


@dataclass(frozen=True)
class Subdomain:
    """Value object for a tenant subdomain (e.g. 'pizza-roma').

    3-63 characters, lowercase alphanumeric with hyphens.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Subdomain must be a non-empty string")
        if len(self.value) < SUBDOMAIN_MIN_LENGTH:
            raise ValueError(
                f"Subdomain must be at least {SUBDOMAIN_MIN_LENGTH} characters"
            )
        if len(self.value) > SUBDOMAIN_MAX_LENGTH:
            raise ValueError(
                f"Subdomain must not exceed {SUBDOMAIN_MAX_LENGTH} characters"
            )
        if not _SUBDOMAIN_RE.match(self.value):
            raise ValueError("Only lowercase letters, numbers, and hyphens allowed")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RoleClaims:
    """Custom claims attached to an identity record.

    Invariant: a host always has a subdomain; nobody else has one.
    """

    role: UserRole = UserRole.GUEST
    subdomain: str | None = None

    def __post_init__(self) -> None:
        if self.role is UserRole.HOST and not self.subdomain:
            raise ValueError("Host claims require a subdomain")
        if self.role is not UserRole.HOST and self.subdomain is not None:
            raise ValueError(f"{self.role.value} claims must not carry a subdomain")

    @classmethod
    def from_custom_claims(cls, claims: dict | None) -> "RoleClaims":
        """Read claims as stored; missing or unknown roles fall back to guest.

        A stored host without a subdomain (written by hand in the console) is
        read as guest rather than raising: privilege is never inferred from a
        malformed record.
        """
        claims = claims or {}
        raw_role = claims.get("role")
        if raw_role not in UserRole.values():
            return cls()
        role = UserRole(raw_role)
        subdomain = claims.get("subdomain") or None
        if role is UserRole.HOST:
            if not subdomain:
                return cls()
            return cls(role=role, subdomain=subdomain)
        return cls(role=role)

    def to_custom_claims(self) -> dict[str, str | None]:
        """Full claim set written to the identity store (replaces any previous claims)."""
        return {"role": self.role.value, "subdomain": self.subdomain}
