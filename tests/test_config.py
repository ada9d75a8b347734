"""Unit tests for pizzeria.core.config.Settings validation."""

import unittest

from pydantic import SecretStr, ValidationError

from pizzeria.core.config import Settings


class TestDatabaseUrl(unittest.TestCase):
    def test_accepts_postgres_and_sqlite(self) -> None:
        for url in ("postgresql://u:p@localhost/db", "sqlite:///./pizzeria.db", "sqlite+pysqlite:///:memory:"):
            self.assertEqual(Settings(DATABASE_URL=url).DATABASE_URL, url)

    def test_rejects_other_schemes(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://u:p@localhost/db")

    def test_rejects_blank(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="   ")


class TestJwtSettings(unittest.TestCase):
    def test_rejects_blank_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET=SecretStr("  "))

    def test_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            Settings(JWT_EXPIRE_MINUTES=10081)
        self.assertEqual(Settings(JWT_EXPIRE_MINUTES=60).JWT_EXPIRE_MINUTES, 60)

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=3)
        with self.assertRaises(ValidationError):
            Settings(BCRYPT_ROUNDS=17)


class TestApiPrefix(unittest.TestCase):
    def test_trailing_slash_stripped(self) -> None:
        self.assertEqual(Settings(API_PREFIX="/api/").API_PREFIX, "/api")

    def test_must_start_with_slash(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(API_PREFIX="api")


class TestFactorySettings(unittest.TestCase):
    def test_blank_url_means_not_configured(self) -> None:
        self.assertIsNone(Settings(FACTORY_URL="").FACTORY_URL)

    def test_url_normalized(self) -> None:
        self.assertEqual(
            Settings(FACTORY_URL="https://factory.example.com/").FACTORY_URL,
            "https://factory.example.com",
        )

    def test_url_scheme_required(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(FACTORY_URL="ftp://factory.example.com")

    def test_timeout_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(FACTORY_REQUEST_TIMEOUT_SEC=0)
        with self.assertRaises(ValidationError):
            Settings(FACTORY_REQUEST_TIMEOUT_SEC=121)


if __name__ == "__main__":
    unittest.main()
