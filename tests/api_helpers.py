"""Shared helpers for the HTTP-level tests."""

import re
import uuid

from fastapi.testclient import TestClient

from pizzeria.core.database import SessionLocal
from pizzeria.main import app
from pizzeria.schemas.auth import Role, RoleEntry
from pizzeria.services.users import add_user

JWT_PATTERN = re.compile(r"^[a-zA-Z0-9\-_]*\.[a-zA-Z0-9\-_]*\.[a-zA-Z0-9\-_]*$")

client = TestClient(app)


def random_name() -> str:
    return uuid.uuid4().hex[:10]


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_diner(name: str = "pizza diner", password: str = "a") -> tuple[dict, str, str]:
    """Register through the API; returns (user, token, password)."""
    body = {"name": name, "email": f"{random_name()}@test.com", "password": password}
    res = client.post("/api/auth", json=body)
    assert res.status_code == 200, res.text
    return res.json()["user"], res.json()["token"], password


def create_admin_user(password: str = "toomanysecrets") -> tuple[dict, str]:
    """Seed an admin directly in the store, then log in; returns (user, token)."""
    name = random_name()
    db = SessionLocal()
    try:
        add_user(db, name, f"{name}@admin.com", password, roles=[RoleEntry(role=Role.ADMIN)])
    finally:
        db.close()
    res = client.put("/api/auth", json={"email": f"{name}@admin.com", "password": password})
    assert res.status_code == 200, res.text
    return res.json()["user"], res.json()["token"]


def create_franchise(admin_token: str, admin_emails: list[str]) -> dict:
    res = client.post(
        "/api/franchise",
        json={"name": random_name(), "admins": [{"email": e} for e in admin_emails]},
        headers=auth_header(admin_token),
    )
    assert res.status_code == 200, res.text
    return res.json()
