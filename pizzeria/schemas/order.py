"""Schemas for the menu and diner orders."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MenuItemCreate(BaseModel):
    """Body for adding a pizza to the menu. Price is stored as sent."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=1024)
    image: str = Field(default="", max_length=1024)
    price: float


class MenuItemOut(BaseModel):
    id: int
    title: str
    description: str
    image: str
    price: float


class OrderItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    menu_id: int = Field(..., alias="menuId")
    description: str = Field(default="", max_length=1024)
    price: float


class OrderCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    franchise_id: int = Field(..., alias="franchiseId")
    store_id: int = Field(..., alias="storeId")
    items: list[OrderItemIn] = Field(..., min_length=1, max_length=100)


class OrderItemOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    menu_id: int = Field(..., alias="menuId")
    description: str
    price: float


class OrderOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    franchise_id: int = Field(..., alias="franchiseId")
    store_id: int = Field(..., alias="storeId")
    date: datetime
    items: list[OrderItemOut]


class OrdersResponse(BaseModel):
    """One page of the caller's orders."""

    model_config = ConfigDict(populate_by_name=True)

    diner_id: int = Field(..., alias="dinerId")
    orders: list[OrderOut]
    page: int


class OrderCreateResponse(BaseModel):
    """
    The stored order; jwt and followLinkToEndChaos are only present when the
    order was fulfilled by the pizza factory.
    """

    model_config = ConfigDict(populate_by_name=True)

    order: OrderOut
    jwt: str | None = None
    follow_link_to_end_chaos: str | None = Field(default=None, alias="followLinkToEndChaos")
