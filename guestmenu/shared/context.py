"""Request context management using contextvars.

Async-safe storage for request-scoped values that log records pick up
(request ID). Set by RequestIDMiddleware, read by RequestIDLogFilter.
"""

from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> object:
    """Set the request ID for the current task; returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: object) -> None:
    """Restore the request ID that was active before set_request_id."""
    _request_id.reset(token)  # type: ignore[arg-type]


def get_request_id() -> str | None:
    """Return the request ID of the current request, or None outside a request."""
    return _request_id.get()
