"""Ban and unban users.

A ban disables the Firebase Auth account (primary signal) and writes a
``bannedUsers/{uid}`` record (secondary signal). The two writes are not
atomic: a failure between them leaves either a disabled account without a
record or a record for an enabled account. Re-running the same operation
repairs either state.
"""

import logging

from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from db import FirestoreService
from errors import InternalError
from services.authorization import AdminPolicy, CallerIdentity
from services.identity import IdentityService
from services.types import OperationResult
from services.validation import require_user_id

logger = logging.getLogger(__name__)

DEFAULT_BAN_REASON = "No reason provided"


class ModerationService:
    """Disables and re-enables user accounts."""

    def __init__(
        self,
        firestore: FirestoreService,
        identity: IdentityService,
        policy: AdminPolicy,
    ) -> None:
        self.firestore = firestore
        self.identity = identity
        self.policy = policy

    async def ban_user(
        self,
        caller: CallerIdentity | None,
        user_id: str | None,
        reason: str | None = None,
    ) -> OperationResult:
        """Disable a user's account and record the ban.

        The user's data is preserved.
        """
        caller = self.policy.authorize(caller)
        user_id = require_user_id(user_id, caller, self_action="ban")

        try:
            await self.identity.set_disabled(user_id, True)
            await self.firestore.banned_user(user_id).set(
                {
                    "bannedAt": SERVER_TIMESTAMP,
                    "bannedBy": caller.uid,
                    "reason": reason or DEFAULT_BAN_REASON,
                }
            )
        except Exception as e:
            logger.exception("Error banning user %s", user_id)
            raise InternalError(f"Error banning user: {e}") from e

        logger.info("Admin %s banned user %s", caller.uid, user_id)
        return OperationResult(
            success=True, message=f"User {user_id} has been banned."
        )

    async def unban_user(
        self, caller: CallerIdentity | None, user_id: str | None
    ) -> OperationResult:
        """Re-enable a user's account and drop the ban record."""
        caller = self.policy.authorize(caller)
        user_id = require_user_id(user_id)

        try:
            await self.identity.set_disabled(user_id, False)
            await self.firestore.banned_user(user_id).delete()
        except Exception as e:
            logger.exception("Error unbanning user %s", user_id)
            raise InternalError(f"Error unbanning user: {e}") from e

        logger.info("Admin %s unbanned user %s", caller.uid, user_id)
        return OperationResult(
            success=True, message=f"User {user_id} has been unbanned."
        )
