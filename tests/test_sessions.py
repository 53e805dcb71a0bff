"""Unit tests for identity session backends (JWT and server-side)."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt

from securenotes.core.errors import InvalidAssertion
from securenotes.schemas.auth import Identity
from securenotes.services.sessions import (
    JwtIdentitySession,
    ServerIdentitySession,
    build_identity_session,
)

from support import make_settings

ALICE = Identity(id=1, username="user1", role="user")
SECRET = "unit-test-secret"


class TestJwtIdentitySession(unittest.TestCase):
    def setUp(self) -> None:
        self.sessions = JwtIdentitySession(SECRET, "HS256", expire_minutes=60)

    def test_round_trip(self) -> None:
        token = self.sessions.establish(ALICE)
        self.assertEqual(self.sessions.resolve(token), ALICE)

    def test_token_carries_id_username_role(self) -> None:
        payload = jwt.decode(self.sessions.establish(ALICE), SECRET, algorithms=["HS256"])
        self.assertEqual(payload["sub"], "1")
        self.assertEqual(payload["username"], "user1")
        self.assertEqual(payload["role"], "user")
        self.assertIn("exp", payload)

    def test_max_age_matches_expiry(self) -> None:
        self.assertEqual(self.sessions.max_age_seconds, 3600)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=2)
        token = jwt.encode(
            {"sub": "1", "username": "user1", "role": "user", "iat": past, "exp": past + timedelta(minutes=1)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidAssertion):
            self.sessions.resolve(token)

    def test_wrong_signature_rejected(self) -> None:
        other = JwtIdentitySession("another-secret", "HS256", expire_minutes=60)
        with self.assertRaises(InvalidAssertion):
            self.sessions.resolve(other.establish(ALICE))

    def test_garbage_rejected(self) -> None:
        with self.assertRaises(InvalidAssertion):
            self.sessions.resolve("not-a-jwt")

    def test_unknown_role_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "1", "username": "user1", "role": "root", "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidAssertion):
            self.sessions.resolve(token)

    def test_non_numeric_subject_rejected(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "user1", "username": "user1", "role": "user", "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(InvalidAssertion):
            self.sessions.resolve(token)

    def test_revoke_does_not_invalidate_token(self) -> None:
        """Stateless tokens stay valid until expiry even after logout."""
        token = self.sessions.establish(ALICE)
        self.sessions.revoke(token)
        self.assertEqual(self.sessions.resolve(token), ALICE)


class TestServerIdentitySession(unittest.TestCase):
    def setUp(self) -> None:
        self.sessions = ServerIdentitySession(expire_minutes=1)

    def test_round_trip(self) -> None:
        session_id = self.sessions.establish(ALICE)
        self.assertEqual(self.sessions.resolve(session_id), ALICE)

    def test_session_ids_are_unique(self) -> None:
        self.assertNotEqual(self.sessions.establish(ALICE), self.sessions.establish(ALICE))

    def test_revoke_invalidates(self) -> None:
        session_id = self.sessions.establish(ALICE)
        self.sessions.revoke(session_id)
        with self.assertRaises(InvalidAssertion):
            self.sessions.resolve(session_id)

    def test_unknown_session_rejected(self) -> None:
        with self.assertRaises(InvalidAssertion):
            self.sessions.resolve("missing")

    def test_expired_session_rejected(self) -> None:
        with patch("securenotes.services.sessions.time.monotonic", return_value=1000.0):
            session_id = self.sessions.establish(ALICE)
        with patch("securenotes.services.sessions.time.monotonic", return_value=1061.0):
            with self.assertRaises(InvalidAssertion):
                self.sessions.resolve(session_id)


class TestBuildIdentitySession(unittest.TestCase):
    def test_jwt_backend_by_default(self) -> None:
        settings = make_settings("/tmp")
        self.assertIsInstance(build_identity_session(settings), JwtIdentitySession)

    def test_server_backend(self) -> None:
        settings = make_settings("/tmp", SESSION_BACKEND="server")
        self.assertIsInstance(build_identity_session(settings), ServerIdentitySession)


if __name__ == "__main__":
    unittest.main()
