"""Pydantic request/response schemas for the API."""

from guestmenu.schemas.health import HealthResponse, ReadinessResponse
from guestmenu.schemas.order import EventAckResponse, OrderCreatedEvent
from guestmenu.schemas.subdomain import (
    RegisterSubdomainRequest,
    RegisterSubdomainResponse,
    SubdomainAvailabilityResponse,
)
from guestmenu.schemas.user import (
    DeleteUserRequest,
    DeleteUserResponse,
    RoleInfoRequest,
    RoleInfoResponse,
    SetUserRoleRequest,
    SetUserRoleResponse,
)

__all__ = [
    "DeleteUserRequest",
    "DeleteUserResponse",
    "EventAckResponse",
    "HealthResponse",
    "OrderCreatedEvent",
    "ReadinessResponse",
    "RegisterSubdomainRequest",
    "RegisterSubdomainResponse",
    "RoleInfoRequest",
    "RoleInfoResponse",
    "SetUserRoleRequest",
    "SetUserRoleResponse",
    "SubdomainAvailabilityResponse",
]
