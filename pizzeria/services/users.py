"""Credential store: user records, role entries and active session tokens."""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pizzeria.core.errors import NotFoundError, ValidationError
from pizzeria.core.security import hash_password, token_digest
from pizzeria.models import AuthToken, DinerOrder, User, UserRole
from pizzeria.schemas.auth import CurrentUser, Role, RoleEntry

logger = logging.getLogger(__name__)


def user_to_schema(user: User) -> CurrentUser:
    """External view of a user; the password hash is never copied."""
    return CurrentUser(
        id=user.id,
        name=user.name,
        email=user.email,
        roles=[RoleEntry(role=r.role, object_id=r.object_id) for r in user.roles],
    )


def name_filter_to_like(pattern: str) -> str:
    """
    Translate a '*' wildcard filter into a SQL LIKE pattern.

    Literal '%', '_' and '\\' in the input are escaped so only '*' acts as a wildcard.
    """
    escaped = pattern.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "%")


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def get_user(db: Session, user_id: int) -> User | None:
    return db.get(User, user_id)


def add_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    roles: list[RoleEntry] | None = None,
) -> User:
    """
    Persist a new user with a hashed password.

    Roles default to a single diner entry; seeding scripts and tests may pass
    explicit roles. Raises ValidationError if the email is already registered.
    """
    if roles is None:
        roles = [RoleEntry(role=Role.DINER)]
    if find_user_by_email(db, email) is not None:
        raise ValidationError("email already in use")

    user = User(name=name, email=email, password_hash=hash_password(password))
    user.roles = [UserRole(role=r.role.value, object_id=r.object_id) for r in roles]
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError("email already in use") from e
    db.refresh(user)
    logger.info(
        "User created",
        extra={"user_id": user.id, "roles": [r.role for r in user.roles]},
    )
    return user


def update_user(
    db: Session,
    user_id: int,
    name: str | None = None,
    email: str | None = None,
    password: str | None = None,
) -> User:
    """
    Apply the given profile fields together in one transaction.

    Omitted (None) fields are left unchanged. Nothing is written if any part
    fails.
    """
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("unknown user")

    if email is not None and email != user.email:
        other = find_user_by_email(db, email)
        if other is not None and other.id != user.id:
            raise ValidationError("email already in use")

    password_hash = hash_password(password) if password is not None else None
    try:
        if name is not None:
            user.name = name
        if email is not None:
            user.email = email
        if password_hash is not None:
            user.password_hash = password_hash
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ValidationError("email already in use") from e
    db.refresh(user)
    logger.info(
        "User updated",
        extra={
            "user_id": user.id,
            "fields": [
                f
                for f, v in (("name", name), ("email", email), ("password", password))
                if v is not None
            ],
        },
    )
    return user


def delete_user(db: Session, user_id: int) -> None:
    """
    Delete a user, their role entries and every session token they hold.

    Their orders are kept but detached from the account in the same
    transaction; SQLite may hand the freed id to the next registered user.
    """
    user = get_user(db, user_id)
    if user is None:
        raise NotFoundError("unknown user")
    try:
        revoked = db.execute(delete(AuthToken).where(AuthToken.user_id == user_id)).rowcount
        db.execute(update(DinerOrder).where(DinerOrder.diner_id == user_id).values(diner_id=None))
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("User deleted", extra={"user_id": user_id, "sessions_revoked": revoked})


def get_users(
    db: Session,
    page: int = 0,
    limit: int = 10,
    name_pattern: str = "*",
) -> tuple[list[User], bool]:
    """
    Return one page of users whose name matches name_pattern, and whether more exist.

    Pages are zero-based. One extra row is fetched to detect a following page.
    """
    stmt = (
        select(User)
        .where(User.name.like(name_filter_to_like(name_pattern or "*"), escape="\\"))
        .order_by(User.id)
        .offset(page * limit)
        .limit(limit + 1)
    )
    users = list(db.execute(stmt).scalars().all())
    more = len(users) > limit
    return users[:limit], more


def add_active_token(db: Session, token: str, user_id: int) -> None:
    db.add(AuthToken(token_digest=token_digest(token), user_id=user_id))
    db.commit()


def remove_active_token(db: Session, token: str) -> bool:
    """Remove a token from the active sessions; returns whether it was present."""
    removed = db.execute(
        delete(AuthToken).where(AuthToken.token_digest == token_digest(token))
    ).rowcount
    db.commit()
    return removed > 0


def is_token_active(db: Session, token: str) -> bool:
    stmt = select(AuthToken.token_digest).where(AuthToken.token_digest == token_digest(token))
    return db.execute(stmt).first() is not None
