"""Identity directory service backed by Firebase Authentication.

The Firebase Admin auth API is synchronous, so every call is wrapped with
asyncio.to_thread to keep request handlers non-blocking.
"""

import asyncio
import logging
from collections.abc import AsyncIterator

import firebase_admin
from firebase_admin import auth

from services.authorization import CallerIdentity

logger = logging.getLogger(__name__)

# Firebase rejects list_users pages larger than this
MAX_PAGE_SIZE = 1000


class IdentityService:
    """Service for reading and mutating Firebase Auth accounts."""

    def __init__(self, app: firebase_admin.App | None = None) -> None:
        """Initialize with a Firebase app.

        Args:
            app: Firebase app to use. Defaults to the app initialized by
                the Firestore service.
        """
        self._app = app

    async def verify_token(self, id_token: str | None) -> CallerIdentity | None:
        """Verify a Firebase ID token.

        Returns:
            Caller identity, or None when the token is missing or invalid.
        """
        if not id_token:
            return None

        try:
            decoded_token = await asyncio.to_thread(
                auth.verify_id_token, id_token, app=self._app, clock_skew_seconds=10
            )
        except (auth.InvalidIdTokenError, ValueError) as e:
            logger.warning("Invalid or expired Firebase ID token: %s", e)
            return None

        return CallerIdentity.from_token(decoded_token)

    async def delete_user(self, user_id: str) -> None:
        """Delete an account from the directory."""
        await asyncio.to_thread(auth.delete_user, user_id, app=self._app)
        logger.info("Deleted auth user %s", user_id)

    async def set_disabled(self, user_id: str, disabled: bool) -> None:
        """Disable or re-enable an account."""
        await asyncio.to_thread(
            auth.update_user, user_id, disabled=disabled, app=self._app
        )
        logger.info("Set auth user %s disabled=%s", user_id, disabled)

    async def list_users_page(
        self, page_token: str | None = None, max_results: int = MAX_PAGE_SIZE
    ) -> auth.ListUsersPage:
        """Fetch a single page of accounts."""
        return await asyncio.to_thread(
            auth.list_users,
            page_token=page_token,
            max_results=max_results,
            app=self._app,
        )

    async def iter_user_pages(
        self, page_token: str | None = None, page_size: int = MAX_PAGE_SIZE
    ) -> AsyncIterator[auth.ListUsersPage]:
        """Yield pages of accounts until the directory is exhausted.

        Pages are fetched lazily. Each yielded page exposes
        ``next_page_token``, so an interrupted scan can be restarted from
        the last token seen.
        """
        page_size = min(page_size, MAX_PAGE_SIZE)
        while True:
            page = await self.list_users_page(page_token, page_size)
            yield page

            page_token = page.next_page_token
            if not page_token:
                break
