"""Subdomain registry: availability checks and registration for onboarding hosts."""

from __future__ import annotations

import logging

from guestmenu.application.dtos.user import CallerIdentity
from guestmenu.application.interfaces.services import IDocumentStore
from guestmenu.domain.exceptions import (
    InvalidArgumentException,
    SubdomainUnavailableException,
    UnauthenticatedException,
)
from guestmenu.domain.value_objects import Subdomain, normalize_subdomain
from guestmenu.infrastructure.firebase.collections import COLLECTION_SUBDOMAINS, FIELD_USER_ID
from guestmenu.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def parse_subdomain(raw: str | None) -> Subdomain:
    """Normalize raw input and validate it; raise InvalidArgumentException if invalid."""
    try:
        return Subdomain(normalize_subdomain(raw or ""))
    except ValueError as e:
        raise InvalidArgumentException(str(e), field="subdomain") from e


class SubdomainRegistryService:
    """Maps subdomains to their owner via subdomains/{subdomain} = {userId, createdAt}.

    The availability check and the write are not one transaction: two callers
    racing for the same name can both pass the check, and the later write
    replaces the earlier one.
    """

    def __init__(self, document_store: IDocumentStore) -> None:
        self.document_store = document_store

    @staticmethod
    def _path(subdomain: Subdomain) -> str:
        return f"{COLLECTION_SUBDOMAINS}/{subdomain.value}"

    async def is_available(self, subdomain: Subdomain) -> bool:
        return not await self.document_store.exists(self._path(subdomain))

    async def check_availability(self, raw: str | None) -> tuple[Subdomain, bool]:
        """Return the normalized subdomain and whether it is free."""
        subdomain = parse_subdomain(raw)
        return subdomain, await self.is_available(subdomain)

    async def register(self, caller: CallerIdentity | None, raw: str | None) -> Subdomain:
        """Register the subdomain for the calling user.

        Raises:
            UnauthenticatedException: No verified caller.
            InvalidArgumentException: Subdomain fails validation.
            SubdomainUnavailableException: A registry entry already exists.
        """
        if caller is None or not caller.uid:
            raise UnauthenticatedException("User must be authenticated to register a subdomain.")
        subdomain = parse_subdomain(raw)
        if not await self.is_available(subdomain):
            raise SubdomainUnavailableException(subdomain.value)
        await self.document_store.set(
            self._path(subdomain),
            {FIELD_USER_ID: caller.uid, "createdAt": utc_now()},
        )
        logger.info("Subdomain %s registered for user %s", subdomain.value, caller.uid)
        return subdomain
