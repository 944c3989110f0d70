"""Keep chatUsers in step with Firebase Auth accounts.

Accounts are read through the attributes Firebase's ``UserRecord`` exposes
(``uid``, ``email``, ``display_name``, ``photo_url``), so both directory
records and hook payloads can be passed in.
"""

import logging
import time
from typing import Any, Protocol

from google.api_core.exceptions import AlreadyExists

from db import FirestoreService

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Anonymous"


class Account(Protocol):
    uid: str
    email: str | None
    display_name: str | None
    photo_url: str | None


def now_ms() -> int:
    """Current time in epoch milliseconds, the unit the web client stores."""
    return int(time.time() * 1000)


def new_chat_user(account: Account, created_at: int, last_seen: int) -> dict[str, Any]:
    """Build a chatUsers document for an account."""
    return {
        "uid": account.uid,
        "displayName": account.display_name or DEFAULT_DISPLAY_NAME,
        "photoURL": account.photo_url or "",
        "email": account.email or "",
        "createdAt": created_at,
        "lastSeen": last_seen,
    }


class UserSyncService:
    """Creates chat profiles for new accounts."""

    def __init__(self, firestore: FirestoreService) -> None:
        self.firestore = firestore

    async def on_user_created(self, account: Account) -> bool:
        """Create the chatUsers document for a freshly created account.

        Runs from a platform trigger that does not retry, so failures are
        logged and reported through the return value, never raised. The
        document is only created, never overwritten: an existing profile
        is left untouched.

        Returns:
            True when the document was written.
        """
        try:
            now = now_ms()
            await self.firestore.chat_user(account.uid).create(
                new_chat_user(account, created_at=now, last_seen=now)
            )
        except AlreadyExists:
            logger.warning("chatUsers/%s already exists, not overwriting", account.uid)
            return False
        except Exception:
            logger.exception("Error adding new user %s to chatUsers", account.uid)
            return False

        logger.info("New user %s (%s) added to chatUsers", account.uid, account.email)
        return True
