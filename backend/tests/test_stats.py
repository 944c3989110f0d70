"""Tests for admin dashboard stats."""

import pytest

from errors import InternalError, PermissionDenied
from services.stats import StatsService
from tests.fakes import app_path


@pytest.fixture
def service(firestore, policy):
    return StatsService(firestore, policy)


class TestAdminStats:
    """Tests for StatsService.get_admin_stats."""

    @pytest.mark.asyncio
    async def test_counts_top_level_collections(self, service, store, admin_caller):
        for n in range(3):
            store.docs[app_path("chatUsers", f"u{n}")] = {}
        store.docs[app_path("chatUsers", "u0", "friends", "u1")] = {}
        store.docs[app_path("peerPosts", "p1")] = {}
        store.docs[app_path("peerPosts", "p1", "comments", "c1")] = {}

        stats = await service.get_admin_stats(admin_caller)

        assert stats.to_dict() == {
            "totalUsers": 3,
            "totalPosts": 1,
            "totalConversations": 0,
        }

    @pytest.mark.asyncio
    async def test_requires_admin(self, service, user_caller):
        with pytest.raises(PermissionDenied):
            await service.get_admin_stats(user_caller)

    @pytest.mark.asyncio
    async def test_count_failure_is_internal(self, service, store, admin_caller):
        store.fail("get", app_path("conversations"))

        with pytest.raises(InternalError, match="^Error getting stats: "):
            await service.get_admin_stats(admin_caller)
