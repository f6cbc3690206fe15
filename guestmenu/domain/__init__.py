"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from guestmenu.domain.enums import NotificationOutcome, UserRole
from guestmenu.domain.exceptions import (
    GuestMenuException,
    InternalException,
    InvalidArgumentException,
    PermissionDeniedException,
    SubdomainUnavailableException,
    UnauthenticatedException,
    UserNotFoundException,
)
from guestmenu.domain.value_objects import RoleClaims, Subdomain, normalize_subdomain

__all__ = [
    # Enums
    "NotificationOutcome",
    "UserRole",
    # Exceptions
    "GuestMenuException",
    "InternalException",
    "InvalidArgumentException",
    "PermissionDeniedException",
    "SubdomainUnavailableException",
    "UnauthenticatedException",
    "UserNotFoundException",
    # Value objects
    "RoleClaims",
    "Subdomain",
    "normalize_subdomain",
]
