"""Unit tests for pizzeria.core.security: password hashing and session token issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from pizzeria.core.config import settings
from pizzeria.core.errors import InvalidTokenError
from pizzeria.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    token_digest,
    verify_password,
)

JWT_PATTERN = r"^[a-zA-Z0-9\-_]*\.[a-zA-Z0-9\-_]*\.[a-zA-Z0-9\-_]*$"


def _encode(payload: dict, secret: str | None = None) -> str:
    return jwt.encode(
        payload,
        secret or settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


class TestPasswordHashing(unittest.TestCase):
    """hash_password never returns the plain text; verify_password checks against the hash."""

    def test_hash_is_not_plaintext(self) -> None:
        hashed = hash_password("toomanysecrets")
        self.assertNotEqual(hashed, "toomanysecrets")
        self.assertTrue(hashed.startswith("$2"))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(hash_password("a"), hash_password("a"))

    def test_verify_correct_and_wrong(self) -> None:
        hashed = hash_password("a")
        self.assertTrue(verify_password("a", hashed))
        self.assertFalse(verify_password("b", hashed))

    def test_verify_against_garbage_hash_is_false(self) -> None:
        self.assertFalse(verify_password("a", "not-a-bcrypt-hash"))


class TestIssueAndVerify(unittest.TestCase):
    """create_access_token issues a three-segment JWT bound to the user id."""

    def test_token_has_three_segments(self) -> None:
        token = create_access_token(7, "pizza diner", "d@test.com")
        self.assertRegex(token, JWT_PATTERN)

    def test_decode_returns_identity_claims(self) -> None:
        token = create_access_token(7, "pizza diner", "d@test.com")
        claims = decode_access_token(token)
        self.assertEqual(claims["sub"], "7")
        self.assertEqual(claims["name"], "pizza diner")
        self.assertEqual(claims["email"], "d@test.com")
        self.assertIn("jti", claims)

    def test_tokens_for_same_user_are_unique(self) -> None:
        tokens = {create_access_token(7, "n", "e@test.com") for _ in range(5)}
        self.assertEqual(len(tokens), 5)

    def test_tampered_signature_rejected(self) -> None:
        token = create_access_token(7, "n", "e@test.com")
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
        with self.assertRaises(InvalidTokenError):
            decode_access_token(f"{header}.{payload}.{flipped}")

    def test_other_secret_rejected(self) -> None:
        now = datetime.now(UTC)
        token = _encode(
            {"sub": "7", "iat": now, "exp": now + timedelta(minutes=5)},
            secret="someone-elses-secret",
        )
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=2)
        token = _encode({"sub": "7", "iat": past, "exp": past + timedelta(minutes=1)})
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_non_numeric_subject_rejected(self) -> None:
        now = datetime.now(UTC)
        token = _encode({"sub": "abc", "iat": now, "exp": now + timedelta(minutes=5)})
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_missing_subject_rejected(self) -> None:
        now = datetime.now(UTC)
        token = _encode({"iat": now, "exp": now + timedelta(minutes=5)})
        with self.assertRaises(InvalidTokenError):
            decode_access_token(token)

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(InvalidTokenError):
            decode_access_token("not.a.jwt")


class TestTokenDigest(unittest.TestCase):
    def test_digest_is_stable_hex(self) -> None:
        token = create_access_token(1, "n", "e@test.com")
        self.assertEqual(token_digest(token), token_digest(token))
        self.assertEqual(len(token_digest(token)), 64)
        self.assertNotEqual(token_digest(token), token_digest(token + "x"))


if __name__ == "__main__":
    unittest.main()
