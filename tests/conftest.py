"""Test configuration: in-memory SQLite, cheap bcrypt, fixed JWT secret. Must run before app imports."""

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["APP_ENV"] = "dev"
os.environ["FACTORY_URL"] = ""

from pizzeria.core.database import init_db  # noqa: E402

init_db()
