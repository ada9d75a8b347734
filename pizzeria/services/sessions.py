"""
Session lifecycle: register, login, logout and token-based authentication.

A token authenticates only while it both verifies and is recorded as an
active session. Logging out removes the record, so the same token stops
working even though its signature remains valid until expiry.
"""

import logging

from sqlalchemy.orm import Session

from pizzeria.core.errors import InvalidTokenError, NotFoundError, UnauthenticatedError, ValidationError
from pizzeria.core.security import create_access_token, decode_access_token, verify_password
from pizzeria.models import User
from pizzeria.schemas.auth import AuthResponse, CurrentUser, RoleEntry
from pizzeria.services import users

logger = logging.getLogger(__name__)


def issue_session(db: Session, user: User) -> str:
    """Issue a token for the user and record it as active before returning it."""
    token = create_access_token(user.id, user.name, user.email)
    users.add_active_token(db, token, user.id)
    return token


def register(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    roles: list[RoleEntry] | None = None,
) -> AuthResponse:
    """Create a user (diner unless roles are given) and start a session for them."""
    if not name or not email or not password:
        raise ValidationError("name, email, and password are required")
    user = users.add_user(db, name, email, password, roles=roles)
    token = issue_session(db, user)
    logger.info("User registered", extra={"user_id": user.id})
    return AuthResponse(user=users.user_to_schema(user), token=token)


def login(db: Session, email: str, password: str) -> AuthResponse:
    """
    Start a new session for valid credentials.

    Unknown email and wrong password both raise the same NotFoundError.
    """
    user = users.find_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"reason": "unknown user or bad password"})
        raise NotFoundError("unknown user")
    token = issue_session(db, user)
    logger.info("Login succeeded", extra={"user_id": user.id})
    return AuthResponse(user=users.user_to_schema(user), token=token)


def logout(db: Session, token: str) -> None:
    """End the session for a token that authentication already accepted."""
    users.remove_active_token(db, token)
    logger.info("Logout")


def authenticate_token(db: Session, token: str | None) -> CurrentUser:
    """
    Resolve a bearer token to its user.

    Raises UnauthenticatedError when the token is missing, fails verification,
    is no longer an active session, or belongs to a user that no longer exists.
    """
    if not token:
        raise UnauthenticatedError()
    try:
        payload = decode_access_token(token)
    except InvalidTokenError as e:
        logger.debug("Token rejected: %s", e.message)
        raise UnauthenticatedError() from e
    if not users.is_token_active(db, token):
        logger.debug("Token rejected: session not active")
        raise UnauthenticatedError()
    user = users.get_user(db, int(payload["sub"]))
    if user is None:
        raise UnauthenticatedError()
    return users.user_to_schema(user)
