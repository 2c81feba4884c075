"""Unit tests for authgate.services.access_guard: identity and role gating decisions."""

import unittest

from authgate.schemas.auth import Role, UserRecord
from authgate.services.access_guard import (
    Access,
    AccessGuard,
    Allow,
    DenyRedirect,
    RequireRoles,
    require_roles,
    roles,
)


def _user(role: Role | None = None, user_id: int = 1, username: str = "alice") -> UserRecord:
    """Build a minimal UserRecord for tests."""
    return UserRecord(id=user_id, username=username, password_hash="$2b$04$x", role=role)


class TestRequireAuthenticated(unittest.TestCase):
    def setUp(self) -> None:
        self.guard = AccessGuard(login_page="/login", home_page="/")

    def test_absent_identity_redirects_to_login(self) -> None:
        self.assertEqual(self.guard.require_authenticated(None), DenyRedirect("/login"))

    def test_present_identity_allowed(self) -> None:
        self.assertEqual(self.guard.require_authenticated(_user()), Allow())

    def test_identity_without_role_allowed(self) -> None:
        self.assertIsInstance(self.guard.require_authenticated(_user(role=None)), Allow)


class TestRequireRole(unittest.TestCase):
    """EDITOR vs {ADMIN} goes home; EDITOR vs {ADMIN, EDITOR} is allowed."""

    def setUp(self) -> None:
        self.guard = AccessGuard(login_page="/login", home_page="/")

    def test_editor_denied_admin_only_route(self) -> None:
        decision = self.guard.require_role(_user(Role.EDITOR), {Role.ADMIN})
        self.assertEqual(decision, DenyRedirect("/"))

    def test_editor_allowed_admin_or_editor_route(self) -> None:
        decision = self.guard.require_role(_user(Role.EDITOR), {Role.ADMIN, Role.EDITOR})
        self.assertEqual(decision, Allow())

    def test_absent_identity_redirects_to_login(self) -> None:
        self.assertEqual(self.guard.require_role(None, {Role.ADMIN}), DenyRedirect("/login"))

    def test_user_without_role_redirects_home(self) -> None:
        self.assertEqual(self.guard.require_role(_user(None), {Role.ADMIN, Role.EDITOR}), DenyRedirect("/"))

    def test_custom_pages(self) -> None:
        guard = AccessGuard(login_page="/auth/login", home_page="/dashboard")
        self.assertEqual(guard.require_role(None, {Role.ADMIN}), DenyRedirect("/auth/login"))
        self.assertEqual(guard.require_role(_user(Role.EDITOR), {Role.ADMIN}), DenyRedirect("/dashboard"))


class TestCheckPolicy(unittest.TestCase):
    def setUp(self) -> None:
        self.guard = AccessGuard()

    def test_public_always_allowed(self) -> None:
        self.assertEqual(self.guard.check(Access.PUBLIC, None), Allow())
        self.assertEqual(self.guard.check(Access.PUBLIC, _user()), Allow())

    def test_authenticated_policy(self) -> None:
        self.assertEqual(self.guard.check(Access.AUTHENTICATED, None), DenyRedirect("/login"))
        self.assertEqual(self.guard.check(Access.AUTHENTICATED, _user()), Allow())

    def test_role_policy(self) -> None:
        policy = require_roles("ADMIN")
        self.assertEqual(self.guard.check(policy, _user(Role.ADMIN)), Allow())
        self.assertEqual(self.guard.check(policy, _user(Role.EDITOR)), DenyRedirect("/"))
        self.assertEqual(self.guard.check(policy, None), DenyRedirect("/login"))


class TestRolesParsing(unittest.TestCase):
    """Role names are validated when the route table is built."""

    def test_known_names(self) -> None:
        self.assertEqual(roles("ADMIN", "EDITOR"), frozenset({Role.ADMIN, Role.EDITOR}))

    def test_names_are_case_insensitive(self) -> None:
        self.assertEqual(roles("admin", " Editor "), frozenset({Role.ADMIN, Role.EDITOR}))

    def test_accepts_enum_members(self) -> None:
        self.assertEqual(require_roles(Role.ADMIN), RequireRoles(frozenset({Role.ADMIN})))

    def test_unknown_name_rejected(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            roles("ADMIN", "SUPERUSER")
        self.assertIn("SUPERUSER", str(ctx.exception))

    def test_empty_set_rejected(self) -> None:
        with self.assertRaises(ValueError):
            roles()


if __name__ == "__main__":
    unittest.main()
