"""Request and response schemas for admin operations.

Field names are camelCase on the wire to match the web client.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests ---


class UserTargetRequest(CamelModel):
    """Payload naming the user an operation applies to.

    ``user_id`` is optional here so a missing id surfaces as the
    operation's own invalid-argument error.
    """

    user_id: str | None = Field(None, description="Target user ID")


class BanUserRequest(UserTargetRequest):
    reason: str | None = Field(None, description="Reason shown on the ban record")


# --- Responses ---


class OperationResponse(CamelModel):
    """Outcome of a mutating admin operation."""

    success: bool
    message: str


class DeletionDetails(CamelModel):
    auth_deleted: bool
    posts_deleted: int
    vocabulary_deleted: int
    conversations_deleted: int
    friends_removed: int
    errors: list[str]


class DeleteUserResponse(OperationResponse):
    details: DeletionDetails


class MigrationErrorItem(CamelModel):
    uid: str
    email: str | None = None
    error: str


class MigrationDetails(CamelModel):
    total_auth_users: int
    already_existed: int
    newly_created: int
    errors: list[MigrationErrorItem]


class MigrationResponse(OperationResponse):
    details: MigrationDetails


class AdminStatsResponse(CamelModel):
    total_users: int = Field(..., description="Documents in chatUsers")
    total_posts: int = Field(..., description="Documents in peerPosts")
    total_conversations: int = Field(..., description="Documents in conversations")
