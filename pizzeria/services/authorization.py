"""
Authorization decisions for authenticated principals.

Roles are plain data; every check here is a pure function of the caller's
role entries and, where ownership matters, the target id.

Known limitation: has_role ignores a role entry's object_id, so a franchisee
of one franchise passes a franchisee check for any franchise.
"""

from collections.abc import Iterable
from typing import Protocol

from pizzeria.core.errors import ForbiddenError
from pizzeria.schemas.auth import CurrentUser, Role


class _HasRoleKind(Protocol):
    role: str


def has_role(roles: Iterable[_HasRoleKind], role: Role) -> bool:
    """True iff any entry in roles has the given kind (object_id is not consulted)."""
    return any(entry.role == role for entry in roles)


def require_role(user: CurrentUser, role: Role, message: str = "unauthorized") -> None:
    """Raise ForbiddenError unless the user holds role."""
    if not has_role(user.roles, role):
        raise ForbiddenError(message)


def can_manage_user(user: CurrentUser, target_user_id: int) -> bool:
    """A user may change their own profile; admins may change anyone's."""
    return user.id == target_user_id or has_role(user.roles, Role.ADMIN)


def can_view_user_franchises(user: CurrentUser, target_user_id: int) -> bool:
    """Only the user themself or an admin sees a user's franchises."""
    return user.id == target_user_id or has_role(user.roles, Role.ADMIN)
