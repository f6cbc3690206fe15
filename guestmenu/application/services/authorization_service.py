"""Authorization guard: superadmin gate for every privileged operation.

The caller's claims are read from the identity store on every call. Nothing
is cached between requests and nothing from the token or the request body
is trusted for privilege; a forged payload cannot escalate.
"""

from __future__ import annotations

import logging

from guestmenu.application.dtos.user import (
    AuthorizationContext,
    CallerIdentity,
    IdentityRecord,
)
from guestmenu.application.interfaces.services import IIdentityStore
from guestmenu.domain.enums import UserRole
from guestmenu.domain.exceptions import (
    InternalException,
    PermissionDeniedException,
    UnauthenticatedException,
    UserNotFoundException,
)
from guestmenu.domain.value_objects import RoleClaims

logger = logging.getLogger(__name__)


class AuthorizationGuard:
    """Builds a fresh AuthorizationContext per request or refuses the call.

    The bootstrap super-admin is identified by configured uid (preferred) or
    configured email. It is always authorized and can never be deleted or
    demoted through the API.
    """

    def __init__(
        self,
        identity_store: IIdentityStore,
        bootstrap_uid: str | None = None,
        bootstrap_email: str | None = None,
    ) -> None:
        self.identity_store = identity_store
        self.bootstrap_uid = bootstrap_uid or None
        self.bootstrap_email = bootstrap_email.casefold() if bootstrap_email else None

    def is_bootstrap(self, record: IdentityRecord) -> bool:
        """Return True if the record is the bootstrap super-admin."""
        if self.bootstrap_uid and record.uid == self.bootstrap_uid:
            return True
        if self.bootstrap_email and record.email:
            return record.email.casefold() == self.bootstrap_email
        return False

    async def is_bootstrap_uid(self, uid: str) -> bool:
        """Return True if uid belongs to the bootstrap super-admin.

        Only looks the user up when the principal is configured by email.
        Unknown users are not the bootstrap principal.
        """
        if self.bootstrap_uid and uid == self.bootstrap_uid:
            return True
        if not self.bootstrap_email:
            return False
        try:
            record = await self.identity_store.get_user(uid)
        except UserNotFoundException:
            return False
        return self.is_bootstrap(record)

    async def authorize(
        self,
        caller: CallerIdentity | None,
        action: str = "perform this action",
    ) -> AuthorizationContext:
        """Check that the caller is authenticated and currently a superadmin.

        Args:
            caller: Verified token principal, or None when no valid token was sent.
            action: Verb phrase used in error messages (e.g. 'set user roles').

        Returns:
            AuthorizationContext for this request only.

        Raises:
            UnauthenticatedException: No verified caller.
            PermissionDeniedException: Caller is neither superadmin nor bootstrap,
                or no longer exists.
            InternalException: The identity store could not be read.
        """
        if caller is None or not caller.uid:
            raise UnauthenticatedException(f"User must be authenticated to {action}.")

        try:
            record = await self.identity_store.get_user(caller.uid)
        except UserNotFoundException:
            logger.warning("Authorization refused: caller %s has no identity record", caller.uid)
            raise PermissionDeniedException(f"Only super admins can {action}.") from None
        except Exception as e:
            logger.exception("Failed to load caller %s for authorization", caller.uid)
            raise InternalException("Failed to verify caller permissions.", str(e)) from e

        claims = RoleClaims.from_custom_claims(record.custom_claims)
        is_bootstrap = self.is_bootstrap(record)
        if not is_bootstrap and claims.role is not UserRole.SUPERADMIN:
            logger.info(
                "Authorization refused: caller %s has role %s", caller.uid, claims.role.value
            )
            raise PermissionDeniedException(f"Only super admins can {action}.")

        return AuthorizationContext(
            uid=record.uid,
            email=record.email,
            role=UserRole.SUPERADMIN if is_bootstrap else claims.role,
            is_bootstrap=is_bootstrap,
        )
