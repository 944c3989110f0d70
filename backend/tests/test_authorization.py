"""Tests for the admin authorization gate."""

import pytest

from config import Settings
from errors import InvalidArgument, PermissionDenied, Unauthenticated
from services.authorization import AdminPolicy, CallerIdentity, is_admin
from services.validation import require_user_id


class TestAdminPolicy:
    """Tests for AdminPolicy and is_admin."""

    def setup_method(self):
        """Set up test fixtures."""
        self.policy = AdminPolicy(
            admin_emails=frozenset({"admin@example.com"}), admin_claim="admin"
        )

    def test_no_caller_is_unauthenticated(self):
        """Test a missing caller fails before anything else."""
        with pytest.raises(Unauthenticated) as exc_info:
            self.policy.authorize(None)
        assert exc_info.value.kind == "unauthenticated"
        assert exc_info.value.status_code == 401

    def test_non_admin_is_denied(self):
        """Test a caller outside the allow-list is rejected."""
        caller = CallerIdentity(uid="u1", email="user@example.com")
        with pytest.raises(PermissionDenied) as exc_info:
            self.policy.authorize(caller)
        assert exc_info.value.kind == "permission-denied"

    def test_admin_email_is_allowed(self):
        """Test an allow-listed email passes and the caller is returned."""
        caller = CallerIdentity(
            uid="a1", email="admin@example.com", claims={"email_verified": True}
        )
        assert self.policy.authorize(caller) is caller

    def test_admin_email_case_insensitive(self):
        """Test email comparison ignores case."""
        caller = CallerIdentity(
            uid="a1", email="Admin@Example.COM", claims={"email_verified": True}
        )
        assert is_admin(caller, self.policy)

    def test_unverified_email_is_not_admin(self):
        """Test an allow-listed email without a verified flag is rejected."""
        caller = CallerIdentity(
            uid="a1", email="admin@example.com", claims={"email_verified": False}
        )
        with pytest.raises(PermissionDenied):
            self.policy.authorize(caller)

    def test_email_without_verified_claim_is_not_admin(self):
        caller = CallerIdentity(uid="a1", email="admin@example.com")
        assert not is_admin(caller, self.policy)

    def test_admin_claim_is_allowed(self):
        """Test the custom claim grants admin without an allow-listed email."""
        caller = CallerIdentity(uid="a2", email="ops@example.com", claims={"admin": True})
        assert is_admin(caller, self.policy)

    def test_truthy_non_bool_claim_is_not_admin(self):
        """Test only a literal true claim counts."""
        caller = CallerIdentity(uid="a3", email=None, claims={"admin": "yes"})
        assert not is_admin(caller, self.policy)

    def test_missing_email_is_not_admin(self):
        """Test callers without an email are never matched by the allow-list."""
        caller = CallerIdentity(uid="a4")
        assert not is_admin(caller, AdminPolicy(admin_emails=frozenset({""})))

    def test_from_settings(self):
        """Test policy is built from comma-separated settings."""
        settings = Settings(
            firebase_credentials="{}",
            admin_emails="One@example.com, two@example.com",
            admin_claim="staff",
        )
        policy = AdminPolicy.from_settings(settings)
        assert policy.admin_emails == {"one@example.com", "two@example.com"}
        assert policy.admin_claim == "staff"

    def test_from_token(self):
        """Test caller identity is built from a decoded ID token."""
        caller = CallerIdentity.from_token(
            {"uid": "u9", "email": "u9@example.com", "admin": True}
        )
        assert caller.uid == "u9"
        assert caller.email == "u9@example.com"
        assert caller.claims["admin"] is True


class TestRequireUserId:
    """Tests for target user id validation."""

    def test_missing_user_id(self):
        with pytest.raises(InvalidArgument, match="User ID is required."):
            require_user_id(None)

    def test_blank_user_id(self):
        with pytest.raises(InvalidArgument):
            require_user_id("   ")

    def test_self_target_rejected(self):
        caller = CallerIdentity(uid="admin-uid", email="admin@example.com")
        with pytest.raises(InvalidArgument, match="Cannot ban your own account."):
            require_user_id("admin-uid", caller, self_action="ban")

    def test_self_target_allowed_without_action(self):
        """Test self-targeting is only checked when an action is named."""
        caller = CallerIdentity(uid="admin-uid")
        assert require_user_id("admin-uid", caller) == "admin-uid"

    def test_strips_whitespace(self):
        assert require_user_id("  u1 ") == "u1"
