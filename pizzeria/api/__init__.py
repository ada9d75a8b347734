"""API routes."""

from fastapi import APIRouter

from pizzeria.api import auth, franchise, health, order, user

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(user.router, prefix="/user", tags=["user"])
router.include_router(franchise.router, prefix="/franchise", tags=["franchise"])
router.include_router(order.router, prefix="/order", tags=["order"])
