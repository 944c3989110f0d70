"""Dashboard statistics."""

import asyncio
import logging

from db import FirestoreService
from errors import InternalError
from services.authorization import AdminPolicy, CallerIdentity
from services.types import AdminStats

logger = logging.getLogger(__name__)


class StatsService:
    """Counts top-level app collections."""

    def __init__(self, firestore: FirestoreService, policy: AdminPolicy) -> None:
        self.firestore = firestore
        self.policy = policy

    async def get_admin_stats(self, caller: CallerIdentity | None) -> AdminStats:
        """Count users, posts and conversations concurrently."""
        self.policy.authorize(caller)

        try:
            total_users, total_posts, total_conversations = await asyncio.gather(
                self.firestore.count(self.firestore.chat_users()),
                self.firestore.count(self.firestore.posts()),
                self.firestore.count(self.firestore.conversations()),
            )
        except Exception as e:
            logger.exception("Error getting stats")
            raise InternalError(f"Error getting stats: {e}") from e

        return AdminStats(
            total_users=total_users,
            total_posts=total_posts,
            total_conversations=total_conversations,
        )
