"""Request/response schemas for authentication and the authenticated user."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Kinds of role a user can hold. Diner is the default."""

    DINER = "diner"
    FRANCHISEE = "franchisee"
    ADMIN = "admin"


class RoleEntry(BaseModel):
    """One role held by a user; object_id scopes a franchisee role to a franchise."""

    model_config = ConfigDict(populate_by_name=True)

    role: Role
    object_id: int | None = Field(default=None, alias="objectId")


class RegisterRequest(BaseModel):
    """Registration body. Fields are optional here so missing ones surface as a 400."""

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., max_length=255, description="Account email")
    password: str = Field(..., max_length=128, description="Password")


class CurrentUser(BaseModel):
    """
    A user as exposed outside the service: no password or hash field exists here.

    Also the principal returned by the get_current_user dependency.
    """

    id: int
    name: str
    email: str
    roles: list[RoleEntry] = Field(default_factory=list)


class AuthResponse(BaseModel):
    """User plus a freshly issued, already active session token."""

    user: CurrentUser
    token: str = Field(..., description="JWT session token (Authorization: Bearer <token>)")


class MessageResponse(BaseModel):
    """Acknowledgement body for deletions and logout."""

    message: str
