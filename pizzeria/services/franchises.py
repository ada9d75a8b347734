"""Franchise and store persistence, including franchisee role assignment."""

import logging
from collections import defaultdict

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from pizzeria.core.errors import NotFoundError, ValidationError
from pizzeria.models import Franchise, Store, User, UserRole
from pizzeria.schemas.auth import Role
from pizzeria.schemas.franchise import FranchiseAdmin, FranchiseOut, StoreOut
from pizzeria.services.users import find_user_by_email, name_filter_to_like

logger = logging.getLogger(__name__)


def _admins_by_franchise(db: Session, franchise_ids: list[int]) -> dict[int, list[FranchiseAdmin]]:
    """Franchisee users for each franchise id, from the scoped role entries."""
    result: dict[int, list[FranchiseAdmin]] = defaultdict(list)
    if not franchise_ids:
        return result
    rows = db.execute(
        select(UserRole.object_id, User)
        .join(User, User.id == UserRole.user_id)
        .where(
            UserRole.role == Role.FRANCHISEE.value,
            UserRole.object_id.in_(franchise_ids),
        )
        .order_by(UserRole.id)
    ).all()
    for object_id, user in rows:
        result[object_id].append(FranchiseAdmin(id=user.id, name=user.name, email=user.email))
    return result


def _to_schema(franchise: Franchise, admins: list[FranchiseAdmin]) -> FranchiseOut:
    return FranchiseOut(
        id=franchise.id,
        name=franchise.name,
        admins=admins,
        stores=[StoreOut(id=s.id, name=s.name) for s in franchise.stores],
    )


def get_franchises(
    db: Session,
    page: int = 0,
    limit: int = 10,
    name_pattern: str = "*",
) -> tuple[list[FranchiseOut], bool]:
    """One zero-based page of franchises matching name_pattern, and whether more exist."""
    stmt = (
        select(Franchise)
        .where(Franchise.name.like(name_filter_to_like(name_pattern or "*"), escape="\\"))
        .order_by(Franchise.id)
        .offset(page * limit)
        .limit(limit + 1)
    )
    franchises = list(db.execute(stmt).scalars().all())
    more = len(franchises) > limit
    franchises = franchises[:limit]
    admins = _admins_by_franchise(db, [f.id for f in franchises])
    return [_to_schema(f, admins[f.id]) for f in franchises], more


def get_user_franchises(db: Session, user_id: int) -> list[FranchiseOut]:
    """Franchises for which the user holds a franchisee role entry."""
    franchise_ids = list(
        db.execute(
            select(UserRole.object_id).where(
                UserRole.user_id == user_id,
                UserRole.role == Role.FRANCHISEE.value,
                UserRole.object_id.is_not(None),
            )
        ).scalars()
    )
    if not franchise_ids:
        return []
    franchises = db.execute(
        select(Franchise).where(Franchise.id.in_(franchise_ids)).order_by(Franchise.id)
    ).scalars().all()
    admins = _admins_by_franchise(db, [f.id for f in franchises])
    return [_to_schema(f, admins[f.id]) for f in franchises]


def create_franchise(db: Session, name: str | None, admin_emails: list[str]) -> FranchiseOut:
    """
    Create a franchise and grant each listed user a franchisee role scoped to it.

    Every admin email must belong to an existing user; nothing is created otherwise.
    """
    if not name:
        raise ValidationError("franchise name is required")
    if db.execute(select(Franchise).where(Franchise.name == name)).scalar_one_or_none():
        raise ValidationError("franchise name already in use")

    admin_users: list[User] = []
    # One franchisee role per user, however often an email is listed.
    for email in dict.fromkeys(admin_emails):
        user = find_user_by_email(db, email)
        if user is None:
            raise NotFoundError(f"unknown user for franchise admin {email} provided")
        admin_users.append(user)

    franchise = Franchise(name=name)
    db.add(franchise)
    try:
        db.flush()
        for user in admin_users:
            db.add(UserRole(user_id=user.id, role=Role.FRANCHISEE.value, object_id=franchise.id))
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(franchise)
    logger.info(
        "Franchise created",
        extra={"franchise_id": franchise.id, "admin_count": len(admin_users)},
    )
    admins = [FranchiseAdmin(id=u.id, name=u.name, email=u.email) for u in admin_users]
    return _to_schema(franchise, admins)


def delete_franchise(db: Session, franchise_id: int) -> None:
    """Delete a franchise, its stores and the franchisee roles scoped to it. Unknown ids are a no-op."""
    try:
        db.execute(delete(Store).where(Store.franchise_id == franchise_id))
        db.execute(
            delete(UserRole).where(
                UserRole.role == Role.FRANCHISEE.value,
                UserRole.object_id == franchise_id,
            )
        )
        deleted = db.execute(delete(Franchise).where(Franchise.id == franchise_id)).rowcount
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Franchise deleted", extra={"franchise_id": franchise_id, "found": deleted > 0})


def create_store(db: Session, franchise_id: int, name: str | None) -> Store:
    if not name:
        raise ValidationError("store name is required")
    if db.get(Franchise, franchise_id) is None:
        raise NotFoundError("unknown franchise")
    store = Store(franchise_id=franchise_id, name=name)
    db.add(store)
    db.commit()
    db.refresh(store)
    logger.info("Store created", extra={"franchise_id": franchise_id, "store_id": store.id})
    return store


def delete_store(db: Session, franchise_id: int, store_id: int) -> None:
    """Delete a store of the given franchise. Unknown ids are a no-op."""
    deleted = db.execute(
        delete(Store).where(Store.franchise_id == franchise_id, Store.id == store_id)
    ).rowcount
    db.commit()
    logger.info(
        "Store deleted",
        extra={"franchise_id": franchise_id, "store_id": store_id, "found": deleted > 0},
    )
