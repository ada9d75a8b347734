"""User profile and administration routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pizzeria.api.auth import get_current_user
from pizzeria.core.database import get_db
from pizzeria.core.errors import ForbiddenError
from pizzeria.schemas.auth import AuthResponse, CurrentUser, MessageResponse, Role
from pizzeria.schemas.user import UsersListResponse, UserUpdateRequest
from pizzeria.services import sessions, users
from pizzeria.services.authorization import can_manage_user, require_role

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    name: Annotated[str, Query(max_length=255)] = "*",
) -> UsersListResponse:
    """List users a page at a time (admin only). name accepts '*' wildcards."""
    require_role(current_user, Role.ADMIN, "unable to list users")
    page_users, more = users.get_users(db, page, limit, name)
    return UsersListResponse(users=[users.user_to_schema(u) for u in page_users], more=more)


@router.get("/me", response_model=CurrentUser)
def get_me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return the authenticated user."""
    return current_user


@router.put("/{user_id}", response_model=AuthResponse)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Update name, email and/or password of a user. Allowed for the user themself
    or an admin. Returns the updated user with a newly issued token.
    """
    if not can_manage_user(current_user, user_id):
        raise ForbiddenError("unauthorized")
    updated = users.update_user(db, user_id, body.name, body.email, body.password)
    token = sessions.issue_session(db, updated)
    return AuthResponse(user=users.user_to_schema(updated), token=token)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a user and end all of their sessions (admin only)."""
    require_role(current_user, Role.ADMIN, "unable to delete user")
    users.delete_user(db, user_id)
    return MessageResponse(message="user deleted")
