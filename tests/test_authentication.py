"""Tests for acquisitions.services.authentication against an in-memory SQLite store."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

import jwt

from sqlalchemy.exc import OperationalError

from acquisitions.core.errors import AuthenticationError, ErrorKind, InternalError
from acquisitions.core.security import create_access_token, hash_password
from acquisitions.models import User
from acquisitions.schemas.auth import TokenClaims
from acquisitions.services.authentication import authenticate, extract_token
from db_support import make_engine, make_sessionmaker, make_settings


class TestExtractToken(unittest.TestCase):
    """Cookie wins over the bearer credential; blank values count as absent."""

    def test_cookie_preferred(self) -> None:
        self.assertEqual(extract_token("from-cookie", "from-header"), "from-cookie")

    def test_bearer_token(self) -> None:
        self.assertEqual(extract_token(None, "abc.def.ghi"), "abc.def.ghi")

    def test_blank_bearer_ignored(self) -> None:
        self.assertIsNone(extract_token(None, "  "))

    def test_nothing(self) -> None:
        self.assertIsNone(extract_token(None, None))


class TestAuthenticate(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = make_settings()
        self.engine = make_engine()
        self.session = make_sessionmaker(self.engine)()
        self.alice = self._add_user("Alice", "alice@example.com", "user")
        self.bob = self._add_user("Bob", "bob@example.com", "admin")

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def _add_user(self, name: str, email: str, role: str) -> User:
        user = User(name=name, email=email, password_hash=hash_password("secret123", rounds=4), role=role)
        self.session.add(user)
        self.session.commit()
        return user

    def _token(self, user: User) -> str:
        return create_access_token(
            TokenClaims(id=user.id, email=user.email, role=user.role), self.settings
        )

    def test_no_token(self) -> None:
        with self.assertRaises(AuthenticationError) as ctx:
            authenticate(self.session, self.settings, None, None)
        self.assertEqual(ctx.exception.message, "Access denied. No token provided.")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_invalid_token(self) -> None:
        with self.assertRaises(AuthenticationError) as ctx:
            authenticate(self.session, self.settings, "garbage", None)
        self.assertEqual(ctx.exception.message, "Access denied. Invalid token.")

    def test_cookie_token_resolves_identity(self) -> None:
        identity = authenticate(self.session, self.settings, self._token(self.alice), None)
        self.assertEqual(identity.id, self.alice.id)
        self.assertEqual(identity.name, "Alice")
        self.assertEqual(identity.role, "user")

    def test_bearer_token_resolves_identity(self) -> None:
        identity = authenticate(self.session, self.settings, None, self._token(self.bob))
        self.assertEqual(identity.id, self.bob.id)
        self.assertTrue(identity.is_admin)

    def test_cookie_wins_over_header(self) -> None:
        identity = authenticate(
            self.session,
            self.settings,
            self._token(self.alice),
            self._token(self.bob),
        )
        self.assertEqual(identity.id, self.alice.id)

    def test_deleted_user_token_rejected(self) -> None:
        token = self._token(self.alice)
        self.session.delete(self.alice)
        self.session.commit()
        with self.assertRaises(AuthenticationError) as ctx:
            authenticate(self.session, self.settings, token, None)
        self.assertEqual(ctx.exception.message, "Access denied. User not found.")

    def test_identity_reflects_stored_role_not_token_claim(self) -> None:
        token = self._token(self.alice)
        self.alice.role = "admin"
        self.session.commit()
        identity = authenticate(self.session, self.settings, token, None)
        self.assertEqual(identity.role, "admin")

    def test_store_fault_maps_to_internal_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        with self.assertRaises(InternalError) as ctx:
            authenticate(session, self.settings, self._token(self.alice), None)
        self.assertIs(ctx.exception.kind, ErrorKind.INTERNAL)
        self.assertEqual(ctx.exception.message, "Authentication error")

    def test_non_sqlalchemy_lookup_fault_maps_to_internal_error(self) -> None:
        session = MagicMock()
        session.get.side_effect = OverflowError("Python int too large to convert to SQLite INTEGER")
        with self.assertRaises(InternalError) as ctx:
            authenticate(session, self.settings, self._token(self.alice), None)
        self.assertEqual(ctx.exception.message, "Authentication error")

    def test_unexpected_codec_fault_maps_to_internal_error(self) -> None:
        with patch(
            "acquisitions.services.authentication.decode_access_token",
            side_effect=RuntimeError("codec exploded"),
        ):
            with self.assertRaises(InternalError) as ctx:
                authenticate(self.session, self.settings, "any-token", None)
        self.assertEqual(ctx.exception.message, "Authentication error")

    def test_out_of_range_user_id_claim_is_invalid_token(self) -> None:
        token = jwt.encode(
            {
                "sub": str(2**63),
                "email": "alice@example.com",
                "role": "user",
                "exp": datetime.now(UTC) + timedelta(minutes=5),
            },
            "test-secret",
            algorithm="HS256",
        )
        with self.assertRaises(AuthenticationError) as ctx:
            authenticate(self.session, self.settings, None, token)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, "Access denied. Invalid token.")


if __name__ == "__main__":
    unittest.main()
