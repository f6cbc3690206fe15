"""Tenant deletion cascade: remove a user's tenant data, then the user.

The cascade is planned first (an ordered list of delete-sets, one per
step), flattened, and applied as a single atomic commit. The identity
record is deleted only after that commit succeeds, so a failure never
leaves tenant data behind under a uid that no longer exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from guestmenu.application.dtos.user import AuthorizationContext, DeletionResult
from guestmenu.application.interfaces.services import IDocumentStore, IIdentityStore
from guestmenu.application.services.authorization_service import AuthorizationGuard
from guestmenu.domain.exceptions import (
    InternalException,
    InvalidArgumentException,
    PermissionDeniedException,
)
from guestmenu.infrastructure.firebase.collections import (
    COLLECTION_MENUS,
    COLLECTION_PUBLIC_MENUS,
    COLLECTION_SUBDOMAINS,
    COLLECTION_SUBMISSIONS,
    COLLECTION_USERS,
    FIELD_USER_ID,
    SUBCOLLECTION_CATEGORIES,
    SUBCOLLECTION_ITEMS,
    SUBCOLLECTION_PROFILE,
    SUBCOLLECTION_SETTINGS,
    SUBCOLLECTION_SUBMISSION_DATA,
)

logger = logging.getLogger(__name__)

# (root collection, subcollections) owned by a tenant, in deletion order.
# Subcollections are only visited when the root document exists.
TENANT_DOCUMENT_TREES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (COLLECTION_USERS, (SUBCOLLECTION_PROFILE, SUBCOLLECTION_SETTINGS)),
    (COLLECTION_MENUS, (SUBCOLLECTION_CATEGORIES, SUBCOLLECTION_ITEMS)),
    (COLLECTION_SUBMISSIONS, (SUBCOLLECTION_SUBMISSION_DATA,)),
)

# Top-level collections whose documents point back at the owner via userId.
OWNER_INDEXED_COLLECTIONS: tuple[str, ...] = (
    COLLECTION_SUBDOMAINS,
    COLLECTION_PUBLIC_MENUS,
)


@dataclass(frozen=True)
class DeleteSet:
    """Documents removed by one cascade step."""

    step: str
    paths: tuple[str, ...]


def flatten_delete_sets(delete_sets: list[DeleteSet]) -> list[str]:
    """Concatenate paths in step order, keeping the first occurrence of each."""
    seen: set[str] = set()
    ordered: list[str] = []
    for delete_set in delete_sets:
        for path in delete_set.paths:
            if path not in seen:
                seen.add(path)
                ordered.append(path)
    return ordered


class TenantDeletionService:
    """deleteUser: ordered, all-or-nothing removal of a tenant and its owner."""

    def __init__(
        self,
        document_store: IDocumentStore,
        identity_store: IIdentityStore,
        guard: AuthorizationGuard,
    ) -> None:
        self.document_store = document_store
        self.identity_store = identity_store
        self.guard = guard

    async def plan(self, uid: str) -> list[DeleteSet]:
        """Collect every document the cascade removes for uid, one DeleteSet per step."""
        delete_sets: list[DeleteSet] = []
        for root_collection, subcollections in TENANT_DOCUMENT_TREES:
            root_path = f"{root_collection}/{uid}"
            if not await self.document_store.exists(root_path):
                continue
            paths = [root_path]
            for sub in subcollections:
                paths.extend(await self.document_store.list_documents(f"{root_path}/{sub}"))
            delete_sets.append(DeleteSet(step=root_collection, paths=tuple(paths)))

        for collection in OWNER_INDEXED_COLLECTIONS:
            matches = await self.document_store.find_by_field(collection, FIELD_USER_ID, uid)
            if matches:
                delete_sets.append(DeleteSet(step=collection, paths=tuple(matches)))
        return delete_sets

    async def delete_tenant_user(
        self,
        ctx: AuthorizationContext,
        target_uid: str | None,
    ) -> DeletionResult:
        """Delete every tenant document for target_uid, then its identity record.

        Raises:
            InvalidArgumentException: target_uid missing.
            PermissionDeniedException: target is the bootstrap super-admin.
            InternalException: target lookup, planning, commit or identity
                deletion failed. A failed commit leaves the identity intact.
        """
        if not target_uid:
            raise InvalidArgumentException("User ID is required.", field="uid")

        try:
            target = await self.identity_store.get_user(target_uid)
        except Exception as e:
            logger.exception("Error loading user %s for deletion", target_uid)
            raise InternalException("Failed to delete user.", str(e)) from e
        if self.guard.is_bootstrap(target):
            logger.warning("User %s attempted to delete the super admin account", ctx.uid)
            raise PermissionDeniedException("Cannot delete super admin user.")

        try:
            delete_sets = await self.plan(target_uid)
            paths = flatten_delete_sets(delete_sets)
            await self.document_store.delete_all(paths)
        except Exception as e:
            logger.exception("Error deleting Firestore data for user %s", target_uid)
            raise InternalException("Failed to delete user.", str(e)) from e

        logger.info(
            "Deleted %d documents for user %s (%s)",
            len(paths),
            target_uid,
            ", ".join(f"{s.step}={len(s.paths)}" for s in delete_sets) or "none",
        )

        try:
            await self.identity_store.delete_user(target_uid)
        except Exception as e:
            logger.exception(
                "Firestore data for user %s deleted but identity deletion failed", target_uid
            )
            raise InternalException("Failed to delete user.", str(e)) from e

        logger.info("User %s deleted user %s", ctx.uid, target_uid)
        return DeletionResult(uid=target_uid, documents_deleted=len(paths))
