"""Backfill chatUsers from every Firebase Auth account.

Walks the identity directory page by page. Existing chat profiles get their
display fields refreshed, missing ones are created from the account
metadata. The run is idempotent: a second run with no directory changes
creates nothing.
"""

import logging

from db import FirestoreService
from errors import InternalError
from services.authorization import AdminPolicy, CallerIdentity
from services.identity import IdentityService
from services.types import MigrationDetails, MigrationError, OperationResult
from services.user_sync import DEFAULT_DISPLAY_NAME, new_chat_user, now_ms

logger = logging.getLogger(__name__)


class MigrationService:
    """Syncs identity directory accounts into chatUsers."""

    def __init__(
        self,
        firestore: FirestoreService,
        identity: IdentityService,
        policy: AdminPolicy,
        page_size: int = 1000,
    ) -> None:
        self.firestore = firestore
        self.identity = identity
        self.policy = policy
        self.page_size = page_size

    async def migrate_auth_users(self, caller: CallerIdentity | None) -> OperationResult:
        """Admin entry point for the backfill."""
        self.policy.authorize(caller)
        return await self.run()

    async def run(self) -> OperationResult:
        """Run the backfill without an authorization check.

        Used by the admin endpoint after authorization and by the operator
        script, which runs with service account credentials.
        """
        details = MigrationDetails()

        try:
            async for page in self.identity.iter_user_pages(page_size=self.page_size):
                for account in page.users:
                    details.total_auth_users += 1
                    await self._sync_account(account, details)
                logger.info(
                    "Migration progress: %d accounts scanned", details.total_auth_users
                )
        except Exception as e:
            logger.exception("Error during migration")
            raise InternalError(f"Migration error: {e}") from e

        message = (
            f"Migration completed. {details.newly_created} new users added, "
            f"{details.already_existed} already existed."
        )
        logger.info("%s %d error(s)", message, len(details.errors))
        return OperationResult(success=True, message=message, details=details)

    async def _sync_account(self, account, details: MigrationDetails) -> None:
        """Update or create one chat profile, recording failures."""
        try:
            chat_user_ref = self.firestore.chat_user(account.uid)
            existing = await chat_user_ref.get()

            if existing.exists:
                stored = existing.to_dict() or {}
                await chat_user_ref.update(
                    {
                        "displayName": account.display_name
                        or stored.get("displayName")
                        or DEFAULT_DISPLAY_NAME,
                        "photoURL": account.photo_url or stored.get("photoURL") or "",
                        "email": account.email or stored.get("email") or "",
                        "lastSeen": now_ms(),
                    }
                )
                details.already_existed += 1
            else:
                now = now_ms()
                metadata = account.user_metadata
                chat_user = new_chat_user(
                    account,
                    created_at=metadata.creation_timestamp or now,
                    last_seen=metadata.last_sign_in_timestamp or now,
                )
                chat_user["migratedAt"] = now
                await chat_user_ref.set(chat_user)
                details.newly_created += 1

        except Exception as e:
            logger.warning("Failed to migrate user %s: %s", account.uid, e)
            details.errors.append(
                MigrationError(uid=account.uid, email=account.email, error=str(e))
            )
