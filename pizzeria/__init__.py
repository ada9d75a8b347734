"""Pizzeria ordering backend: users, franchises, stores, menu and orders."""

__version__ = "0.1.0"
