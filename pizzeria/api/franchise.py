"""Franchise and store routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pizzeria.api.auth import get_current_user, require_admin
from pizzeria.core.database import get_db
from pizzeria.schemas.auth import CurrentUser, MessageResponse
from pizzeria.schemas.franchise import (
    FranchiseCreateRequest,
    FranchiseOut,
    FranchisesListResponse,
    StoreCreatedResponse,
    StoreCreateRequest,
)
from pizzeria.services import franchises
from pizzeria.services.authorization import can_view_user_franchises

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=FranchisesListResponse)
def list_franchises(
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    name: Annotated[str, Query(max_length=255)] = "*",
) -> FranchisesListResponse:
    """List franchises with their stores. Public."""
    items, more = franchises.get_franchises(db, page, limit, name)
    return FranchisesListResponse(franchises=items, more=more)


@router.get("/{user_id}", response_model=list[FranchiseOut])
def list_user_franchises(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[FranchiseOut]:
    """
    Franchises the given user administers. Callers other than that user
    (and non-admins) receive an empty list rather than an error.
    """
    if not can_view_user_franchises(current_user, user_id):
        return []
    return franchises.get_user_franchises(db, user_id)


@router.post("", response_model=FranchiseOut)
def create_franchise(
    body: FranchiseCreateRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> FranchiseOut:
    """Create a franchise; each listed admin email becomes a franchisee of it (admin only)."""
    return franchises.create_franchise(db, body.name, [a.email for a in body.admins])


# Deliberately unauthenticated: this route has never checked the caller.
@router.delete("/{franchise_id}", response_model=MessageResponse)
def delete_franchise(
    franchise_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a franchise with its stores and franchisee roles."""
    logger.warning("Franchise deletion without authorization check", extra={"franchise_id": franchise_id})
    franchises.delete_franchise(db, franchise_id)
    return MessageResponse(message="franchise deleted")


@router.post("/{franchise_id}/store", response_model=StoreCreatedResponse)
def create_store(
    franchise_id: int,
    body: StoreCreateRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> StoreCreatedResponse:
    """Create a store under a franchise (admin only)."""
    store = franchises.create_store(db, franchise_id, body.name)
    return StoreCreatedResponse(id=store.id, name=store.name, franchise_id=store.franchise_id)


@router.delete("/{franchise_id}/store/{store_id}", response_model=MessageResponse)
def delete_store(
    franchise_id: int,
    store_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a store (admin only)."""
    franchises.delete_store(db, franchise_id, store_id)
    return MessageResponse(message="store deleted")
