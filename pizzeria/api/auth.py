"""Register/login/logout routes and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pizzeria.core.database import get_db
from pizzeria.core.errors import UnauthenticatedError
from pizzeria.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    Role,
)
from pizzeria.services import sessions
from pizzeria.services.authorization import require_role

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """Dependency: the raw bearer token. Raises 401 if the header is missing or not Bearer."""
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()
    return credentials.credentials


def get_current_user(
    token: Annotated[str, Depends(get_bearer_token)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require an active session token and return its user. Raises 401 otherwise."""
    return sessions.authenticate_token(db, token)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require an authenticated user holding the admin role. Raises 403 otherwise."""
    require_role(current_user, Role.ADMIN)
    return current_user


@router.post("", response_model=AuthResponse)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Register a new diner and start a session.
    Include the returned token in the Authorization header as: Bearer <token>
    """
    return sessions.register(db, body.name, body.email, body.password)


@router.put("", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Log in with email and password. Unknown email and wrong password both return 404."""
    return sessions.login(db, body.email, body.password)


@router.delete("", response_model=MessageResponse)
def logout(
    token: Annotated[str, Depends(get_bearer_token)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """End the session of the presented token; the token cannot be used again."""
    sessions.logout(db, token)
    return MessageResponse(message="logout successful")
