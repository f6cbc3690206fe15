"""Domain exceptions for GuestMenu.

Defines domain-level exceptions for the guarded operations. Error codes
mirror the Firebase callable-function error kinds (unauthenticated,
permission-denied, invalid-argument, internal). The presentation layer maps
them to HTTP responses.
"""

from typing import Any


class GuestMenuException(Exception):
    """Base exception for all GuestMenu application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, reason).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class UnauthenticatedException(GuestMenuException):
    """Raised when no verified caller identity is present."""

    def __init__(self, message: str = "User must be authenticated.") -> None:
        super().__init__(message, "unauthenticated")


class PermissionDeniedException(GuestMenuException):
    """Raised when the caller lacks the superadmin role, or targets the bootstrap account."""

    def __init__(self, message: str = "Only super admins can perform this action.") -> None:
        super().__init__(message, "permission-denied")


class InvalidArgumentException(GuestMenuException):
    """Raised when a request field is missing or malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "invalid-argument", details)


class InternalException(GuestMenuException):
    """Raised when a downstream store fails; the underlying message is kept in details."""

    def __init__(self, message: str, reason: str | None = None) -> None:
        """Initialize with a public message and the underlying error message.

        Args:
            message: Human-readable description (e.g. 'Failed to delete user.').
            reason: Message of the underlying error, unmodified.
        """
        details = {"reason": reason} if reason is not None else {}
        super().__init__(message, "internal", details)

    @property
    def reason(self) -> str | None:
        return self.details.get("reason")


class SubdomainUnavailableException(GuestMenuException):
    """Raised when registering a subdomain that already has a registry entry."""

    def __init__(self, subdomain: str) -> None:
        super().__init__(
            f"Subdomain '{subdomain}' is already taken",
            "already-exists",
            {"subdomain": subdomain},
        )


class UserNotFoundException(GuestMenuException):
    """Raised by the identity store when no record exists for a uid."""

    def __init__(self, uid: str) -> None:
        super().__init__(
            f"There is no user record corresponding to the provided identifier: {uid}",
            "not-found",
            {"uid": uid},
        )
