"""SQLAlchemy ORM models."""

from pizzeria.models.base import Base
from pizzeria.models.franchise import Franchise, Store
from pizzeria.models.order import DinerOrder, MenuItem, OrderItem
from pizzeria.models.user import AuthToken, User, UserRole

__all__ = [
    "AuthToken",
    "Base",
    "DinerOrder",
    "Franchise",
    "MenuItem",
    "OrderItem",
    "Store",
    "User",
    "UserRole",
]
