"""Subdomain registry API schemas."""

from pydantic import BaseModel, Field


class SubdomainAvailabilityResponse(BaseModel):
    """Response for GET /subdomains/{subdomain}/availability."""

    subdomain: str = Field(..., description="Normalized subdomain that was checked")
    available: bool


class RegisterSubdomainRequest(BaseModel):
    """Request body for POST /subdomains."""

    subdomain: str | None = None


class RegisterSubdomainResponse(BaseModel):
    subdomain: str
    user_id: str
