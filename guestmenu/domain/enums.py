"""Domain enumerations for GuestMenu.

Enums represent fixed sets of domain values (e.g. user role).
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried in a user's custom claims.

    A host manages exactly one subdomain; a superadmin manages everything.
    Users with no claims are treated as guests.
    """

    GUEST = "guest"
    HOST = "host"
    SUPERADMIN = "superadmin"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid role values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [role.value for role in cls]


class NotificationOutcome(str, Enum):
    """Result of one best-effort order notification."""

    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"
