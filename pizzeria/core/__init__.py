"""Core app configuration and database."""

from pizzeria.core.config import get_settings, settings
from pizzeria.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
