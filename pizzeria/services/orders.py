"""Menu and diner order persistence."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from pizzeria.core.errors import FactoryError, NotFoundError
from pizzeria.models import DinerOrder, MenuItem, OrderItem, Store
from pizzeria.schemas.auth import CurrentUser
from pizzeria.schemas.order import (
    MenuItemCreate,
    MenuItemOut,
    OrderCreateRequest,
    OrderCreateResponse,
    OrderItemOut,
    OrderOut,
    OrdersResponse,
)
from pizzeria.services.factory import is_factory_configured, send_order_to_factory

if TYPE_CHECKING:
    from pizzeria.core.config import Settings

logger = logging.getLogger(__name__)

ORDERS_PER_PAGE = 10


def get_menu(db: Session) -> list[MenuItemOut]:
    items = db.execute(select(MenuItem).order_by(MenuItem.id)).scalars().all()
    return [
        MenuItemOut(id=m.id, title=m.title, description=m.description, image=m.image, price=m.price)
        for m in items
    ]


def add_menu_item(db: Session, item: MenuItemCreate) -> MenuItem:
    menu_item = MenuItem(
        title=item.title,
        description=item.description,
        image=item.image,
        price=item.price,
    )
    db.add(menu_item)
    db.commit()
    db.refresh(menu_item)
    logger.info("Menu item added", extra={"menu_id": menu_item.id})
    return menu_item


def _order_to_schema(order: DinerOrder) -> OrderOut:
    return OrderOut(
        id=order.id,
        franchise_id=order.franchise_id,
        store_id=order.store_id,
        date=order.date,
        items=[
            OrderItemOut(id=i.id, menu_id=i.menu_id, description=i.description, price=i.price)
            for i in order.items
        ],
    )


def get_orders(db: Session, diner_id: int, page: int = 1) -> OrdersResponse:
    """One-based page of the diner's orders, newest first."""
    offset = (max(page, 1) - 1) * ORDERS_PER_PAGE
    orders = db.execute(
        select(DinerOrder)
        .where(DinerOrder.diner_id == diner_id)
        .order_by(DinerOrder.id.desc())
        .offset(offset)
        .limit(ORDERS_PER_PAGE)
    ).scalars().all()
    return OrdersResponse(
        diner_id=diner_id,
        orders=[_order_to_schema(o) for o in orders],
        page=page,
    )


def _stage_order(db: Session, diner_id: int, body: OrderCreateRequest) -> DinerOrder:
    """Validate references and add the order to the session without committing."""
    store = db.get(Store, body.store_id)
    if store is None or store.franchise_id != body.franchise_id:
        raise NotFoundError("unknown store")

    menu_ids = {item.menu_id for item in body.items}
    known = set(db.execute(select(MenuItem.id).where(MenuItem.id.in_(menu_ids))).scalars())
    missing = menu_ids - known
    if missing:
        raise NotFoundError(f"unknown menu item {min(missing)}")

    order = DinerOrder(
        diner_id=diner_id,
        franchise_id=body.franchise_id,
        store_id=body.store_id,
    )
    order.items = [
        OrderItem(menu_id=item.menu_id, description=item.description, price=item.price)
        for item in body.items
    ]
    db.add(order)
    db.flush()
    db.refresh(order)
    return order


async def place_order(
    db: Session,
    diner: CurrentUser,
    body: OrderCreateRequest,
    settings: Settings,
) -> OrderCreateResponse:
    """
    Store an order for the diner and, when a factory is configured, have it fulfilled.

    The order is only committed once the factory (if any) accepted it; a
    factory failure rolls the order back and raises FactoryError.
    """
    try:
        order = _order_to_schema(_stage_order(db, diner.id, body))
        if not is_factory_configured(settings):
            db.commit()
            logger.info("Order created", extra={"order_id": order.id, "diner_id": diner.id})
            return OrderCreateResponse(order=order)
        receipt = await send_order_to_factory(diner, order, settings)
        db.commit()
    except (NotFoundError, FactoryError):
        db.rollback()
        raise
    logger.info(
        "Order created and fulfilled",
        extra={"order_id": order.id, "diner_id": diner.id},
    )
    return OrderCreateResponse(
        order=order,
        jwt=receipt.jwt,
        follow_link_to_end_chaos=receipt.report_url,
    )
