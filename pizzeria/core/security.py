"""Password hashing and session token issuing/verification."""

import hashlib
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from pizzeria.core.config import settings
from pizzeria.core.errors import InvalidTokenError


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; longer inputs would raise.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(user_id: int, name: str, email: str) -> str:
    """
    Create a signed JWT bound to the user id.

    Each call embeds a fresh jti so two sessions never share a token, even when
    issued within the same second.
    """
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "name": name,
        "email": email,
        "jti": uuid.uuid4().hex,
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT; return its claims (sub, name, email, jti, exp, iat).

    Raises InvalidTokenError on a bad signature, malformed token, expiry or a
    missing/non-numeric subject. Says nothing about whether the session is
    still active.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidTokenError(f"Invalid or expired token: {e!s}") from e
    try:
        int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Invalid token payload") from e
    return payload


def token_digest(token: str) -> str:
    """Key under which an issued token is recorded as an active session."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
