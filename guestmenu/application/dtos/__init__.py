"""Application DTOs (plain dataclasses, no transport or ORM types)."""

from guestmenu.application.dtos.order import OrderLine, OrderNotification
from guestmenu.application.dtos.user import (
    AuthorizationContext,
    CallerIdentity,
    DeletionResult,
    IdentityRecord,
    RoleAssignmentResult,
    RoleInfo,
)

__all__ = [
    "AuthorizationContext",
    "CallerIdentity",
    "DeletionResult",
    "IdentityRecord",
    "OrderLine",
    "OrderNotification",
    "RoleAssignmentResult",
    "RoleInfo",
]
