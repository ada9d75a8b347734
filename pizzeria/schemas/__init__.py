"""Pydantic request/response schemas."""

from pizzeria.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    Role,
    RoleEntry,
)
from pizzeria.schemas.franchise import (
    FranchiseCreateRequest,
    FranchiseOut,
    FranchisesListResponse,
    StoreCreatedResponse,
    StoreCreateRequest,
)
from pizzeria.schemas.health import HealthResponse
from pizzeria.schemas.order import (
    MenuItemCreate,
    MenuItemOut,
    OrderCreateRequest,
    OrderCreateResponse,
    OrderOut,
    OrdersResponse,
)
from pizzeria.schemas.user import UsersListResponse, UserUpdateRequest

__all__ = [
    "AuthResponse",
    "CurrentUser",
    "FranchiseCreateRequest",
    "FranchiseOut",
    "FranchisesListResponse",
    "HealthResponse",
    "LoginRequest",
    "MenuItemCreate",
    "MenuItemOut",
    "MessageResponse",
    "OrderCreateRequest",
    "OrderCreateResponse",
    "OrderOut",
    "OrdersResponse",
    "RegisterRequest",
    "Role",
    "RoleEntry",
    "StoreCreateRequest",
    "StoreCreatedResponse",
    "UserUpdateRequest",
    "UsersListResponse",
]
