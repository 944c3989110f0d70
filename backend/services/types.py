"""Shared types and dataclasses for services.

Result dataclasses serialize to the camelCase keys the admin dashboard
reads.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DeletionDetails:
    """What a cascading user deletion removed."""

    auth_deleted: bool = False
    posts_deleted: int = 0
    vocabulary_deleted: int = 0
    conversations_deleted: int = 0
    friends_removed: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "authDeleted": self.auth_deleted,
            "postsDeleted": self.posts_deleted,
            "vocabularyDeleted": self.vocabulary_deleted,
            "conversationsDeleted": self.conversations_deleted,
            "friendsRemoved": self.friends_removed,
            "errors": list(self.errors),
        }


@dataclass
class MigrationError:
    """A single account the backfill could not sync."""

    uid: str
    email: str | None
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"uid": self.uid, "email": self.email, "error": self.error}


@dataclass
class MigrationDetails:
    """Aggregate counts of an identity backfill run."""

    total_auth_users: int = 0
    already_existed: int = 0
    newly_created: int = 0
    errors: list[MigrationError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalAuthUsers": self.total_auth_users,
            "alreadyExisted": self.already_existed,
            "newlyCreated": self.newly_created,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass
class AdminStats:
    """Document counts shown on the admin dashboard."""

    total_users: int
    total_posts: int
    total_conversations: int

    def to_dict(self) -> dict[str, int]:
        return {
            "totalUsers": self.total_users,
            "totalPosts": self.total_posts,
            "totalConversations": self.total_conversations,
        }


@dataclass
class OperationResult:
    """Outcome of an admin operation."""

    success: bool
    message: str
    details: DeletionDetails | MigrationDetails | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.details is not None:
            result["details"] = self.details.to_dict()
        return result
