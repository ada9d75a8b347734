"""Schemas for user management endpoints."""

from pydantic import BaseModel, Field

from pizzeria.schemas.auth import CurrentUser


class UserUpdateRequest(BaseModel):
    """Profile update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=128)


class UsersListResponse(BaseModel):
    """Response for GET /user (admin only)."""

    users: list[CurrentUser]
    more: bool = Field(..., description="True when another page of users exists")
