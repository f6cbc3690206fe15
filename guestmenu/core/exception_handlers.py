"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. The JSON "error" field carries the callable
error code (unauthenticated, permission-denied, ...).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from guestmenu.core.config import get_settings
from guestmenu.domain.exceptions import GuestMenuException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "unauthenticated": 401,
    "permission-denied": 403,
    "invalid-argument": 400,
    "not-found": 404,
    "already-exists": 409,
    "internal": 500,
}


def status_for_error_code(error_code: str) -> int:
    """HTTP status for a domain error code; unknown codes are treated as internal."""
    return _ERROR_CODE_STATUS.get(error_code, 500)


def _guestmenu_exception_handler(
    request: Request, exc: GuestMenuException
) -> JSONResponse:
    """Return JSON from GuestMenuException.to_dict() with the mapped status code."""
    status = status_for_error_code(exc.error_code)
    if status >= 500:
        logger.error("%s %s failed: %s %s", request.method, request.url.path, exc.message, exc.details)
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "invalid-argument",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Pydantic errors without the raw 'ctx'/'input' values, which may not serialize."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http-error", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "internal", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: GuestMenuException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(GuestMenuException, _guestmenu_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
