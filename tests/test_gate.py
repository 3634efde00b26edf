"""Unit tests for the authorization gate decisions and the login flow."""

import unittest
from datetime import UTC, datetime, timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

from rideshare.core.errors import Unauthenticated
from rideshare.core.security import TokenService, hash_password
from rideshare.services.auth import (
    LOGIN_FAILURE,
    Authorized,
    Denied,
    always,
    authorize,
    is_admin,
    login,
)
from tests.support import TEST_SETTINGS

ALICE = SimpleNamespace(username="alice", id=2, admin=False)
ADMIN = SimpleNamespace(username="admin", id=1, admin=True)


def _exists(name: str) -> bool:
    return True


class TestAuthorize(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(TEST_SETTINGS)

    def test_missing_token_is_401_with_generic_message(self) -> None:
        decision = authorize(None, self.tokens, _exists, always)
        self.assertEqual(decision, Denied(401, "Authentication failed"))

    def test_missing_token_uses_custom_message(self) -> None:
        decision = authorize("", self.tokens, _exists, is_admin, "needs admin permissions")
        self.assertEqual(decision, Denied(401, "needs admin permissions"))

    def test_malformed_token_is_401(self) -> None:
        decision = authorize("garbage", self.tokens, _exists, always)
        self.assertIsInstance(decision, Denied)
        self.assertEqual(decision.status_code, 401)

    def test_expired_token_is_401(self) -> None:
        past = datetime.now(UTC) - timedelta(hours=2)
        token = TokenService(TEST_SETTINGS, clock=lambda: past).issue(ALICE)
        decision = authorize(token, self.tokens, _exists, always)
        self.assertEqual(decision.status_code, 401)

    def test_deleted_subject_is_401(self) -> None:
        token = self.tokens.issue(ALICE)
        decision = authorize(token, self.tokens, lambda name: False, always)
        self.assertEqual(decision, Denied(401, "Authentication failed"))

    def test_failing_predicate_is_403(self) -> None:
        token = self.tokens.issue(ALICE)
        decision = authorize(
            token, self.tokens, _exists, is_admin, "needs admin permissions"
        )
        self.assertEqual(decision, Denied(403, "needs admin permissions"))

    def test_failing_predicate_without_message_is_generic(self) -> None:
        token = self.tokens.issue(ALICE)
        decision = authorize(token, self.tokens, _exists, lambda identity: False)
        self.assertEqual(decision, Denied(403, "Authentication failed"))

    def test_admin_passes_admin_gate(self) -> None:
        token = self.tokens.issue(ADMIN)
        decision = authorize(token, self.tokens, _exists, is_admin)
        self.assertIsInstance(decision, Authorized)
        self.assertEqual(decision.identity.username, "admin")
        self.assertTrue(decision.identity.admin)

    def test_predicate_sees_token_claims(self) -> None:
        token = self.tokens.issue(ALICE)
        predicate = MagicMock(return_value=True)
        decision = authorize(token, self.tokens, _exists, predicate)
        self.assertIsInstance(decision, Authorized)
        predicate.assert_called_once_with(decision.identity)


class TestLogin(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(TEST_SETTINGS)
        self.user = SimpleNamespace(
            id=2,
            username="alice",
            firstname="A",
            lastname="L",
            email="a@a",
            phone=None,
            admin=False,
            password_hash=hash_password("p1", rounds=4),
        )
        self.accounts = MagicMock()
        self.accounts.get_by_name.side_effect = (
            lambda name: self.user if name == "alice" else None
        )

    def test_success_returns_token_and_public_user(self) -> None:
        result = login(self.accounts, self.tokens, "alice", "p1")
        self.assertEqual(result.user.id, 2)
        self.assertEqual(result.user.username, "alice")
        self.assertNotIn("password_hash", result.model_dump()["user"])
        self.assertEqual(self.tokens.verify(result.token).username, "alice")

    def test_wrong_password_and_unknown_user_are_indistinguishable(self) -> None:
        with self.assertRaises(Unauthenticated) as wrong_password:
            login(self.accounts, self.tokens, "alice", "nope")
        with self.assertRaises(Unauthenticated) as unknown_user:
            login(self.accounts, self.tokens, "nobody", "p1")
        self.assertEqual(wrong_password.exception.message, LOGIN_FAILURE)
        self.assertEqual(unknown_user.exception.message, LOGIN_FAILURE)
        self.assertEqual(wrong_password.exception.status_code, 401)


if __name__ == "__main__":
    unittest.main()
