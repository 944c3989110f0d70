"""Cascading deletion of a user and everything they own.

Deletion runs as an ordered list of stages:

1. the user's posts and their comments
2. the user's comments on other posts (full scan of posts)
3. the user's vocabulary
4. metadata and profile documents
5. the chat graph: friends on both sides, requests, share requests, profile
6. conversations the user takes part in, with their messages
7. the Firebase Auth account

Every stage is best-effort: a failure is logged and recorded in the report
and the next stage still runs. Nothing is rolled back, so a report with
errors means some data may remain and the call can be repeated.
"""

import logging
from collections.abc import Awaitable, Callable

from google.cloud.firestore_v1 import FieldFilter

from db import FirestoreService
from db import collections as c
from services.authorization import AdminPolicy, CallerIdentity
from services.identity import IdentityService
from services.types import DeletionDetails, OperationResult
from services.validation import require_user_id

logger = logging.getLogger(__name__)


class UserDeletionService:
    """Removes a user from Firestore and Firebase Auth."""

    def __init__(
        self,
        firestore: FirestoreService,
        identity: IdentityService,
        policy: AdminPolicy,
    ) -> None:
        self.firestore = firestore
        self.identity = identity
        self.policy = policy

    async def delete_user_completely(
        self, caller: CallerIdentity | None, user_id: str | None
    ) -> OperationResult:
        """Delete a user and all data that names them.

        Raises:
            Unauthenticated, PermissionDenied: Caller is not an admin.
            InvalidArgument: Missing user id or the admin targets itself.
        """
        caller = self.policy.authorize(caller)
        user_id = require_user_id(user_id, caller, self_action="delete")

        logger.info("Admin %s deleting user %s", caller.uid, user_id)
        details = DeletionDetails()

        stages: list[tuple[str, Callable[[str, DeletionDetails], Awaitable[None]]]] = [
            ("Error deleting posts", self._delete_authored_posts),
            ("Error deleting comments", self._delete_authored_comments),
            ("Error deleting vocabulary", self._delete_vocabulary),
            ("Could not delete metadata", self._delete_metadata),
            ("Could not delete profile", self._delete_profile),
            ("Error cleaning chatUsers", self._delete_chat_user),
            ("Error deleting conversations", self._delete_conversations),
            ("Could not delete Auth user", self._delete_auth_user),
        ]

        for label, stage in stages:
            await self._run_stage(label, stage, user_id, details)

        if details.errors:
            logger.warning(
                "User %s deleted with %d error(s): %s",
                user_id,
                len(details.errors),
                details.errors,
            )
            message = f"User {user_id} deleted with {len(details.errors)} error(s)."
        else:
            logger.info("User %s deleted: %s", user_id, details.to_dict())
            message = f"User {user_id} deleted successfully."

        return OperationResult(
            success=not details.errors, message=message, details=details
        )

    async def _run_stage(
        self,
        label: str,
        stage: Callable[[str, DeletionDetails], Awaitable[None]],
        user_id: str,
        details: DeletionDetails,
    ) -> None:
        """Run one stage, recording its failure instead of raising."""
        try:
            await stage(user_id, details)
        except Exception as e:
            logger.warning("%s for user %s: %s", label, user_id, e)
            details.errors.append(f"{label}: {e}")

    # --- Stages ---

    async def _delete_authored_posts(
        self, user_id: str, details: DeletionDetails
    ) -> None:
        posts = await (
            self.firestore.posts()
            .where(filter=FieldFilter("authorId", "==", user_id))
            .get()
        )
        for post in posts:
            await self.firestore.delete_documents(
                post.reference.collection(c.SUBCOLLECTION_COMMENTS)
            )
            await post.reference.delete()
            details.posts_deleted += 1

    async def _delete_authored_comments(
        self, user_id: str, details: DeletionDetails
    ) -> None:
        # Comment authorship is nested under each post, so every post is scanned
        posts = await self.firestore.posts().get()
        for post in posts:
            comments = await (
                post.reference.collection(c.SUBCOLLECTION_COMMENTS)
                .where(filter=FieldFilter("authorId", "==", user_id))
                .get()
            )
            if not comments:
                continue

            comment_count = (post.to_dict() or {}).get("commentCount") or 0
            for comment in comments:
                await comment.reference.delete()
                comment_count = max(0, comment_count - 1)
                await post.reference.update({"commentCount": comment_count})

    async def _delete_vocabulary(self, user_id: str, details: DeletionDetails) -> None:
        vocabulary = self.firestore.user_data(user_id).collection(
            c.SUBCOLLECTION_VOCABULARY
        )
        details.vocabulary_deleted += await self.firestore.delete_documents(vocabulary)

    async def _delete_metadata(self, user_id: str, details: DeletionDetails) -> None:
        await (
            self.firestore.user_data(user_id)
            .collection(c.SUBCOLLECTION_METADATA)
            .document(c.METADATA_DOC_ID)
            .delete()
        )

    async def _delete_profile(self, user_id: str, details: DeletionDetails) -> None:
        await (
            self.firestore.user_data(user_id)
            .collection(c.SUBCOLLECTION_PROFILE)
            .document(c.PROFILE_DOC_ID)
            .delete()
        )

    async def _delete_chat_user(self, user_id: str, details: DeletionDetails) -> None:
        chat_user = self.firestore.chat_user(user_id)

        friends = await chat_user.collection(c.SUBCOLLECTION_FRIENDS).get()
        for friend in friends:
            await self._delete_ignoring_errors(
                self.firestore.chat_user(friend.id)
                .collection(c.SUBCOLLECTION_FRIENDS)
                .document(user_id)
            )
            await friend.reference.delete()
            details.friends_removed += 1

        await self.firestore.delete_documents(
            chat_user.collection(c.SUBCOLLECTION_FRIEND_REQUESTS)
        )

        sent_requests = await chat_user.collection(c.SUBCOLLECTION_SENT_REQUESTS).get()
        for sent in sent_requests:
            await self._delete_ignoring_errors(
                self.firestore.chat_user(sent.id)
                .collection(c.SUBCOLLECTION_FRIEND_REQUESTS)
                .document(user_id)
            )
            await sent.reference.delete()

        await self.firestore.delete_documents(
            chat_user.collection(c.SUBCOLLECTION_SHARE_REQUESTS)
        )

        await chat_user.delete()

    async def _delete_conversations(
        self, user_id: str, details: DeletionDetails
    ) -> None:
        conversations = await (
            self.firestore.conversations()
            .where(filter=FieldFilter("participants", "array_contains", user_id))
            .get()
        )
        for conversation in conversations:
            await self.firestore.delete_documents(
                conversation.reference.collection(c.SUBCOLLECTION_MESSAGES)
            )
            await conversation.reference.delete()
            details.conversations_deleted += 1

    async def _delete_auth_user(self, user_id: str, details: DeletionDetails) -> None:
        await self.identity.delete_user(user_id)
        details.auth_deleted = True

    async def _delete_ignoring_errors(self, doc_ref) -> None:
        """Delete the other side of a relation; it may already be gone."""
        try:
            await doc_ref.delete()
        except Exception as e:
            logger.debug("Skipped reciprocal delete of %s: %s", doc_ref.path, e)
