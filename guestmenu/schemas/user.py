"""User administration API schemas (setUserRole, deleteUser, getUserRoleInfo).

Request fields are optional at the schema level so a missing uid or role is
reported by the service as invalid-argument, in the documented check order,
rather than as a generic 422. The routes parse them only after the
authorization guard has passed.
"""

from pydantic import BaseModel, Field


class SetUserRoleRequest(BaseModel):
    """Request body for POST /users/role."""

    uid: str | None = None
    role: str | None = Field(default=None, description="guest, host or superadmin")
    subdomain: str | None = Field(default=None, description="Required when role is host")


class SetUserRoleResponse(BaseModel):
    success: bool = True
    message: str
    role: str
    subdomain: str | None = None


class DeleteUserRequest(BaseModel):
    """Request body for POST /users/delete."""

    uid: str | None = None


class DeleteUserResponse(BaseModel):
    success: bool = True
    message: str


class RoleInfoRequest(BaseModel):
    """Request body for POST /users/role-info."""

    uid: str | None = None


class RoleInfoResponse(BaseModel):
    role: str
    subdomain: str | None = None
