"""Menu and order routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pizzeria.api.auth import get_current_user, require_admin
from pizzeria.core.config import get_settings
from pizzeria.core.database import get_db
from pizzeria.schemas.auth import CurrentUser
from pizzeria.schemas.order import (
    MenuItemCreate,
    MenuItemOut,
    OrderCreateRequest,
    OrderCreateResponse,
    OrdersResponse,
)
from pizzeria.services import orders

router = APIRouter()


@router.get("/menu", response_model=list[MenuItemOut])
def get_menu(
    db: Annotated[Session, Depends(get_db)],
) -> list[MenuItemOut]:
    """Return the pizza menu. Public."""
    return orders.get_menu(db)


@router.put("/menu", response_model=list[MenuItemOut])
def add_menu_item(
    body: MenuItemCreate,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[MenuItemOut]:
    """Add an item to the menu and return the whole menu (admin only)."""
    orders.add_menu_item(db, body)
    return orders.get_menu(db)


@router.get("", response_model=OrdersResponse)
def get_orders(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
) -> OrdersResponse:
    """Return a page of the caller's own orders."""
    return orders.get_orders(db, current_user.id, page)


@router.post("", response_model=OrderCreateResponse, response_model_exclude_none=True)
async def create_order(
    body: OrderCreateRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> OrderCreateResponse:
    """
    Place an order for the caller. When FACTORY_URL is set the order is sent to
    the pizza factory and the response carries its jwt and followLinkToEndChaos.
    """
    return await orders.place_order(db, current_user, body, get_settings())
