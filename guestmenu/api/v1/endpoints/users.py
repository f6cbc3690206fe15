"""User administration API: thin routes over the role and deletion services.

Every route is superadmin-only. The guard re-reads the caller's claims from
Firebase Auth on each request, and runs before the body is parsed so an
unauthorized caller never learns anything from body validation.
"""

import json
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError

from guestmenu.api.v1.dependencies import (
    get_authorization_guard,
    get_caller,
    get_role_service,
    get_tenant_deletion_service,
)
from guestmenu.application.dtos.user import CallerIdentity
from guestmenu.application.services import (
    AuthorizationGuard,
    RoleAssignmentService,
    TenantDeletionService,
)
from guestmenu.domain.exceptions import InvalidArgumentException
from guestmenu.schemas.user import (
    DeleteUserRequest,
    DeleteUserResponse,
    RoleInfoRequest,
    RoleInfoResponse,
    SetUserRoleRequest,
    SetUserRoleResponse,
)

router = APIRouter()

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def _documented_body(model: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI requestBody for a route that parses its own body."""
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


async def _read_body(request: Request, model: type[RequestModel]) -> RequestModel:
    """Parse the JSON body into model. An empty body counts as {}."""
    raw = await request.body()
    try:
        return model.model_validate(json.loads(raw) if raw else {})
    except (ValueError, ValidationError) as e:
        raise InvalidArgumentException(f"Malformed request body: {e}") from e


@router.post(
    "/role",
    response_model=SetUserRoleResponse,
    openapi_extra=_documented_body(SetUserRoleRequest),
)
async def set_user_role(
    request: Request,
    caller: Annotated[CallerIdentity | None, Depends(get_caller)],
    guard: Annotated[AuthorizationGuard, Depends(get_authorization_guard)],
    role_service: Annotated[RoleAssignmentService, Depends(get_role_service)],
):
    """Set a user's role claims (guest, host with subdomain, superadmin)."""
    ctx = await guard.authorize(caller, "set user roles")
    body = await _read_body(request, SetUserRoleRequest)
    result = await role_service.set_role(ctx, body.uid, body.role, body.subdomain)
    return SetUserRoleResponse(
        success=result.success,
        message=result.message,
        role=result.role.value,
        subdomain=result.subdomain,
    )


@router.post(
    "/delete",
    response_model=DeleteUserResponse,
    openapi_extra=_documented_body(DeleteUserRequest),
)
async def delete_user(
    request: Request,
    caller: Annotated[CallerIdentity | None, Depends(get_caller)],
    guard: Annotated[AuthorizationGuard, Depends(get_authorization_guard)],
    deletion_service: Annotated[TenantDeletionService, Depends(get_tenant_deletion_service)],
):
    """Delete a user's tenant data in one atomic commit, then the user."""
    ctx = await guard.authorize(caller, "delete users")
    body = await _read_body(request, DeleteUserRequest)
    result = await deletion_service.delete_tenant_user(ctx, body.uid)
    return DeleteUserResponse(success=result.success, message=result.message)


@router.post(
    "/role-info",
    response_model=RoleInfoResponse,
    openapi_extra=_documented_body(RoleInfoRequest),
)
async def get_user_role_info(
    request: Request,
    caller: Annotated[CallerIdentity | None, Depends(get_caller)],
    guard: Annotated[AuthorizationGuard, Depends(get_authorization_guard)],
    role_service: Annotated[RoleAssignmentService, Depends(get_role_service)],
):
    """Return a user's role and subdomain as stored in their claims."""
    ctx = await guard.authorize(caller, "get user role info")
    body = await _read_body(request, RoleInfoRequest)
    info = await role_service.get_role_info(ctx, body.uid)
    return RoleInfoResponse(role=info.role.value, subdomain=info.subdomain)
