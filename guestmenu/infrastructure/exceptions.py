"""Infrastructure exceptions for the Firebase REST APIs and outbound mail.

They extend GuestMenuException so an error that escapes a service still maps
to an 'internal' response; services normally wrap them in InternalException
with the message below as the reason.
"""

from guestmenu.domain.exceptions import GuestMenuException


class BackendServiceError(GuestMenuException):
    """Base exception for calls to a managed backend."""

    def __init__(self, service: str, message: str, status_code: int | None = None) -> None:
        details: dict = {"service": service}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, "internal", details)
        self.status_code = status_code


class FirestoreError(BackendServiceError):
    """Firestore REST call failed (non-2xx other than 404)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__("firestore", message, status_code)


class IdentityToolkitError(BackendServiceError):
    """Identity Toolkit (Firebase Auth) REST call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__("identity", message, status_code)


class MailDeliveryError(BackendServiceError):
    """Mail transport rejected or could not deliver a message."""

    def __init__(self, message: str) -> None:
        super().__init__("mail", message)
