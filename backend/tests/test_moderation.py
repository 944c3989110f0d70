"""Tests for ban and unban."""

import pytest
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from errors import InternalError, InvalidArgument, PermissionDenied, Unauthenticated
from services.moderation import ModerationService
from tests.fakes import FakeIdentityService, app_path, make_account


@pytest.fixture
def directory():
    return FakeIdentityService(accounts=[make_account("u1", email="u1@example.com")])


@pytest.fixture
def service(firestore, directory, policy):
    return ModerationService(firestore, directory, policy)


class TestBanUser:
    """Tests for ModerationService.ban_user."""

    @pytest.mark.asyncio
    async def test_ban_disables_account_and_records_ban(
        self, service, store, directory, admin_caller
    ):
        result = await service.ban_user(admin_caller, "u1", "spam")

        assert result.to_dict() == {
            "success": True,
            "message": "User u1 has been banned.",
        }
        assert directory.accounts["u1"].disabled is True
        record = store.docs[app_path("bannedUsers", "u1")]
        assert record["bannedBy"] == admin_caller.uid
        assert record["reason"] == "spam"
        assert record["bannedAt"] is SERVER_TIMESTAMP

    @pytest.mark.asyncio
    async def test_ban_default_reason(self, service, store, admin_caller):
        await service.ban_user(admin_caller, "u1")

        assert store.docs[app_path("bannedUsers", "u1")]["reason"] == (
            "No reason provided"
        )

    @pytest.mark.asyncio
    async def test_ban_requires_user_id(self, service, admin_caller):
        with pytest.raises(InvalidArgument, match="User ID is required."):
            await service.ban_user(admin_caller, None)

    @pytest.mark.asyncio
    async def test_ban_self_rejected(self, service, store, admin_caller):
        with pytest.raises(InvalidArgument, match="Cannot ban your own account."):
            await service.ban_user(admin_caller, admin_caller.uid)
        assert store.docs == {}

    @pytest.mark.asyncio
    async def test_ban_requires_admin(self, service, store, directory, user_caller):
        with pytest.raises(PermissionDenied):
            await service.ban_user(user_caller, "u1")
        with pytest.raises(Unauthenticated):
            await service.ban_user(None, "u1")

        assert directory.accounts["u1"].disabled is False
        assert store.docs == {}

    @pytest.mark.asyncio
    async def test_ban_unknown_user_is_internal(self, service, store, admin_caller):
        with pytest.raises(InternalError, match="^Error banning user: "):
            await service.ban_user(admin_caller, "ghost")
        assert store.docs == {}

    @pytest.mark.asyncio
    async def test_record_write_failure_leaves_account_disabled(
        self, service, store, directory, admin_caller
    ):
        """Test the two-step ban is not atomic."""
        store.fail("set", app_path("bannedUsers", "u1"))

        with pytest.raises(InternalError):
            await service.ban_user(admin_caller, "u1")

        assert directory.accounts["u1"].disabled is True
        assert app_path("bannedUsers", "u1") not in store.docs


class TestUnbanUser:
    """Tests for ModerationService.unban_user."""

    @pytest.mark.asyncio
    async def test_unban_reverses_ban(self, service, store, directory, admin_caller):
        await service.ban_user(admin_caller, "u1", "spam")

        result = await service.unban_user(admin_caller, "u1")

        assert result.success is True
        assert result.message == "User u1 has been unbanned."
        assert directory.accounts["u1"].disabled is False
        assert app_path("bannedUsers", "u1") not in store.docs

    @pytest.mark.asyncio
    async def test_unban_requires_user_id(self, service, admin_caller):
        with pytest.raises(InvalidArgument):
            await service.unban_user(admin_caller, "")

    @pytest.mark.asyncio
    async def test_unban_requires_admin(self, service, user_caller):
        with pytest.raises(PermissionDenied):
            await service.unban_user(user_caller, "u1")

    @pytest.mark.asyncio
    async def test_unban_failure_is_internal(self, service, admin_caller):
        with pytest.raises(InternalError, match="^Error unbanning user: "):
            await service.unban_user(admin_caller, "ghost")
