"""ORM models for franchises and their stores."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from pizzeria.models.base import Base


class Franchise(Base):
    """
    A franchise owning zero or more stores.

    Franchise admins are not stored here; they are the users holding a
    'franchisee' role entry whose object_id is this franchise's id.
    """

    __tablename__ = "franchises"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)

    stores = relationship(
        "Store",
        back_populates="franchise",
        cascade="all, delete-orphan",
        order_by="Store.id",
        lazy="selectin",
    )


class Store(Base):
    """A physical store belonging to one franchise."""

    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    franchise_id = Column(
        Integer,
        ForeignKey("franchises.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)

    franchise = relationship("Franchise", back_populates="stores")
