"""POST /hooks/user-created - Platform trigger for new Firebase Auth accounts."""

import logging

from fastapi import Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dependencies import get_user_sync_service
from services.user_sync import UserSyncService

logger = logging.getLogger(__name__)


# --- Schemas ---


class NewAccount(BaseModel):
    """Account fields sent by the identity platform on creation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    uid: str = Field(..., min_length=1, description="Firebase Auth uid")
    email: str | None = None
    display_name: str | None = None
    photo_url: str | None = Field(None, alias="photoURL")


class HookResponse(BaseModel):
    success: bool


# --- Handler ---


async def on_user_created(
    account: NewAccount,
    sync_service: UserSyncService = Depends(get_user_sync_service),
) -> HookResponse:
    """Create the chat profile for a new account.

    Answers 200 for any authenticated call: the platform does not retry
    this trigger. An account that already has a profile is left as is.
    """
    logger.info("User created trigger: %s", account.uid)
    success = await sync_service.on_user_created(account)
    return HookResponse(success=success)
