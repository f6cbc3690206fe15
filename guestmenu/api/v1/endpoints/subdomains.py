"""Subdomain registry API used by host onboarding."""

from typing import Annotated

from fastapi import APIRouter, Depends

from guestmenu.api.v1.dependencies import get_caller, get_subdomain_service
from guestmenu.application.dtos.user import CallerIdentity
from guestmenu.application.services import SubdomainRegistryService
from guestmenu.schemas.subdomain import (
    RegisterSubdomainRequest,
    RegisterSubdomainResponse,
    SubdomainAvailabilityResponse,
)

router = APIRouter()


@router.get("/{subdomain}/availability", response_model=SubdomainAvailabilityResponse)
async def check_subdomain_availability(
    subdomain: str,
    service: Annotated[SubdomainRegistryService, Depends(get_subdomain_service)],
):
    """Public: normalize and validate the name, then report whether it is free."""
    normalized, available = await service.check_availability(subdomain)
    return SubdomainAvailabilityResponse(subdomain=normalized.value, available=available)


@router.post("", response_model=RegisterSubdomainResponse, status_code=201)
async def register_subdomain(
    body: RegisterSubdomainRequest,
    caller: Annotated[CallerIdentity | None, Depends(get_caller)],
    service: Annotated[SubdomainRegistryService, Depends(get_subdomain_service)],
):
    """Claim a subdomain for the calling user (409 when already taken)."""
    subdomain = await service.register(caller, body.subdomain)
    return RegisterSubdomainResponse(subdomain=subdomain.value, user_id=caller.uid)
