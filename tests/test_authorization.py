"""Unit tests for acquisitions.services.authorization: role and ownership rules."""

import unittest

from acquisitions.core.errors import AuthorizationError, ErrorKind
from acquisitions.schemas.auth import CurrentUser
from acquisitions.services.authorization import (
    DENY_DELETE_OTHERS,
    DENY_ROLE_CHANGE,
    DENY_UPDATE_OTHERS,
    WARN_ADMIN_SELF_DELETE,
    Action,
    decide,
    enforce,
    is_self_or_admin,
)


def _identity(user_id: int = 1, role: str = "user") -> CurrentUser:
    return CurrentUser(id=user_id, email=f"user{user_id}@example.com", name=f"User {user_id}", role=role)


class TestReads(unittest.TestCase):
    """Any authenticated identity passes the policy for reads."""

    def test_read_all_allowed(self) -> None:
        self.assertTrue(decide(_identity(), Action.READ_ALL).allowed)

    def test_read_one_of_other_user_allowed_at_policy_layer(self) -> None:
        self.assertTrue(decide(_identity(1), Action.READ_ONE, 2).allowed)


class TestUpdate(unittest.TestCase):
    def test_self_update_allowed(self) -> None:
        self.assertTrue(decide(_identity(1), Action.UPDATE, 1, {"name": "New"}).allowed)

    def test_update_other_denied_for_user(self) -> None:
        decision = decide(_identity(1), Action.UPDATE, 2, {"name": "New"})
        self.assertFalse(decision.allowed)
        self.assertEqual(decision.reason, DENY_UPDATE_OTHERS)

    def test_role_change_on_self_denied_for_user(self) -> None:
        decision = decide(_identity(1), Action.UPDATE, 1, {"role": "admin"})
        self.assertFalse(decision.allowed)
        self.assertEqual(decision.reason, DENY_ROLE_CHANGE)

    def test_role_check_precedes_ownership_check(self) -> None:
        decision = decide(_identity(1), Action.UPDATE, 2, {"role": "admin", "name": "X"})
        self.assertEqual(decision.reason, DENY_ROLE_CHANGE)

    def test_null_role_is_not_a_role_change(self) -> None:
        self.assertTrue(decide(_identity(1), Action.UPDATE, 1, {"role": None}).allowed)

    def test_admin_may_update_anyone_including_role(self) -> None:
        self.assertTrue(decide(_identity(9, "admin"), Action.UPDATE, 2, {"role": "admin"}).allowed)

    def test_update_without_target_is_a_programming_error(self) -> None:
        with self.assertRaises(ValueError):
            decide(_identity(1), Action.UPDATE, None, {"name": "X"})


class TestDelete(unittest.TestCase):
    def test_self_delete_allowed(self) -> None:
        decision = decide(_identity(1), Action.DELETE, 1)
        self.assertTrue(decision.allowed)
        self.assertIsNone(decision.warning)

    def test_delete_other_denied_for_user(self) -> None:
        decision = decide(_identity(1), Action.DELETE, 2)
        self.assertFalse(decision.allowed)
        self.assertEqual(decision.reason, DENY_DELETE_OTHERS)

    def test_admin_deletes_other(self) -> None:
        self.assertTrue(decide(_identity(9, "admin"), Action.DELETE, 2).allowed)

    def test_admin_self_delete_allowed_with_warning(self) -> None:
        decision = decide(_identity(9, "admin"), Action.DELETE, 9)
        self.assertTrue(decision.allowed)
        self.assertEqual(decision.warning, WARN_ADMIN_SELF_DELETE)


class TestEnforce(unittest.TestCase):
    def test_enforce_raises_authorization_error_with_reason(self) -> None:
        with self.assertRaises(AuthorizationError) as ctx:
            enforce(_identity(1), Action.DELETE, 2)
        self.assertIs(ctx.exception.kind, ErrorKind.AUTHORIZATION)
        self.assertEqual(ctx.exception.status_code, 403)
        self.assertEqual(ctx.exception.message, DENY_DELETE_OTHERS)

    def test_enforce_returns_decision_when_allowed(self) -> None:
        self.assertTrue(enforce(_identity(1), Action.UPDATE, 1, {"name": "Y"}).allowed)

    def test_is_self_or_admin(self) -> None:
        self.assertTrue(is_self_or_admin(_identity(1), 1))
        self.assertFalse(is_self_or_admin(_identity(1), 2))
        self.assertTrue(is_self_or_admin(_identity(3, "admin"), 2))


if __name__ == "__main__":
    unittest.main()
