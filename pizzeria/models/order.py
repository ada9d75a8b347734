"""ORM models for the menu and diner orders."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from pizzeria.models.base import Base


class MenuItem(Base):
    """A pizza on the menu."""

    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1024), nullable=False, default="")
    image = Column(String(1024), nullable=False, default="")
    price = Column(Float, nullable=False)


class DinerOrder(Base):
    """
    An order placed by a diner at a store.

    franchise_id and store_id are kept as plain values so order history
    survives franchise and store deletion.
    """

    __tablename__ = "diner_orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    diner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    franchise_id = Column(Integer, nullable=False)
    store_id = Column(Integer, nullable=False)
    date = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy="selectin",
    )


class OrderItem(Base):
    """One line of an order; description and price are captured at order time."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey("diner_orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    menu_id = Column(Integer, nullable=False)
    description = Column(String(1024), nullable=False, default="")
    price = Column(Float, nullable=False)

    order = relationship("DinerOrder", back_populates="items")
