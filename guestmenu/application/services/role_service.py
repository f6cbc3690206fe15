"""Role assignment: validate and write a user's role claims; read them back."""

from __future__ import annotations

import logging

from guestmenu.application.dtos.user import (
    AuthorizationContext,
    RoleAssignmentResult,
    RoleInfo,
)
from guestmenu.application.interfaces.services import IIdentityStore
from guestmenu.application.services.authorization_service import AuthorizationGuard
from guestmenu.domain.enums import UserRole
from guestmenu.domain.exceptions import (
    InternalException,
    InvalidArgumentException,
    PermissionDeniedException,
)
from guestmenu.domain.value_objects import RoleClaims

logger = logging.getLogger(__name__)


class RoleAssignmentService:
    """setUserRole / getUserRoleInfo. Callers must pass an AuthorizationContext.

    A role write is a total overwrite of the claim set: any other custom
    claims the user had are discarded. Failed writes are reported, never retried.
    """

    def __init__(self, identity_store: IIdentityStore, guard: AuthorizationGuard) -> None:
        self.identity_store = identity_store
        self.guard = guard

    async def set_role(
        self,
        ctx: AuthorizationContext,
        target_uid: str | None,
        role: str | None,
        subdomain: str | None = None,
    ) -> RoleAssignmentResult:
        """Replace target's claims with {role, subdomain (hosts only)}.

        Checks run in order and the first failure wins: uid present, role
        known, host has a subdomain, target is not the bootstrap principal
        being demoted.
        """
        if not target_uid:
            raise InvalidArgumentException("User ID is required.", field="uid")
        if role not in UserRole.values():
            raise InvalidArgumentException(
                "Invalid role. Must be 'guest', 'host', or 'superadmin'.", field="role"
            )
        new_role = UserRole(role)
        if new_role is UserRole.HOST and not subdomain:
            raise InvalidArgumentException(
                "Subdomain is required for host role.", field="subdomain"
            )
        claims = RoleClaims(
            role=new_role,
            subdomain=subdomain if new_role is UserRole.HOST else None,
        )

        try:
            if new_role is not UserRole.SUPERADMIN and await self.guard.is_bootstrap_uid(target_uid):
                raise PermissionDeniedException("Cannot change the super admin's role.")
            await self.identity_store.set_custom_claims(target_uid, claims.to_custom_claims())
        except PermissionDeniedException:
            raise
        except Exception as e:
            logger.exception("Error setting user role for %s", target_uid)
            raise InternalException("Failed to set user role.", str(e)) from e

        logger.info(
            "User %s set role of %s to %s (subdomain=%s)",
            ctx.uid,
            target_uid,
            claims.role.value,
            claims.subdomain,
        )
        suffix = f" for {claims.subdomain}" if claims.role is UserRole.HOST else ""
        return RoleAssignmentResult(
            role=claims.role,
            subdomain=claims.subdomain,
            message=f"User role set to {claims.role.value}{suffix}",
        )

    async def get_role_info(
        self,
        ctx: AuthorizationContext,
        target_uid: str | None,
    ) -> RoleInfo:
        """Return the target's effective role; users without claims are guests."""
        if not target_uid:
            raise InvalidArgumentException("User ID is required.", field="uid")
        try:
            record = await self.identity_store.get_user(target_uid)
        except Exception as e:
            logger.exception("Error getting user role info for %s", target_uid)
            raise InternalException("Failed to get user role info.", str(e)) from e
        claims = RoleClaims.from_custom_claims(record.custom_claims)
        return RoleInfo(role=claims.role, subdomain=claims.subdomain)
