"""FastAPI dependency injection for services.

Clients are cached with @lru_cache() to avoid recreation per request;
operation services are cheap and built per request from the cached clients.
"""

import secrets
from functools import lru_cache

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config import get_settings
from db import FirestoreService
from errors import Unauthenticated
from services.authorization import AdminPolicy, CallerIdentity
from services.identity import IdentityService
from services.migration import MigrationService
from services.moderation import ModerationService
from services.stats import StatsService
from services.user_deletion import UserDeletionService
from services.user_sync import UserSyncService

bearer_scheme = HTTPBearer(auto_error=False)

# --- Cached Singletons ---


@lru_cache
def get_firestore_service() -> FirestoreService:
    """Get cached Firestore service (also initializes the Firebase app)."""
    return FirestoreService()


@lru_cache
def get_identity_service() -> IdentityService:
    """Get cached Firebase Auth service."""
    get_firestore_service()
    return IdentityService()


def get_admin_policy() -> AdminPolicy:
    """Get the admin policy from current settings."""
    return AdminPolicy.from_settings(get_settings())


# --- Caller Identity ---


async def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    identity: IdentityService = Depends(get_identity_service),
) -> CallerIdentity | None:
    """Resolve the caller from the bearer ID token.

    Returns None for a missing or invalid token; the admin gate turns that
    into an unauthenticated error.
    """
    if credentials is None:
        return None
    return await identity.verify_token(credentials.credentials)


# --- Platform Hooks ---


def verify_hook_secret(
    x_hook_secret: str | None = Header(None, alias="X-Hook-Secret"),
) -> None:
    """Only the identity platform may fire hooks.

    Raises:
        Unauthenticated: Missing or wrong secret, or no secret configured.
    """
    expected = get_settings().hook_secret
    if not expected or not x_hook_secret:
        raise Unauthenticated("Hook secret is required.")
    if not secrets.compare_digest(x_hook_secret.encode(), expected.encode()):
        raise Unauthenticated("Invalid hook secret.")


# --- Composed Services ---


def get_user_deletion_service(
    firestore: FirestoreService = Depends(get_firestore_service),
    identity: IdentityService = Depends(get_identity_service),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> UserDeletionService:
    return UserDeletionService(firestore, identity, policy)


def get_moderation_service(
    firestore: FirestoreService = Depends(get_firestore_service),
    identity: IdentityService = Depends(get_identity_service),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> ModerationService:
    return ModerationService(firestore, identity, policy)


def get_stats_service(
    firestore: FirestoreService = Depends(get_firestore_service),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> StatsService:
    return StatsService(firestore, policy)


def get_migration_service(
    firestore: FirestoreService = Depends(get_firestore_service),
    identity: IdentityService = Depends(get_identity_service),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> MigrationService:
    """Get migration service with the configured page size."""
    return MigrationService(
        firestore,
        identity,
        policy,
        page_size=get_settings().migration_page_size,
    )


def get_user_sync_service(
    firestore: FirestoreService = Depends(get_firestore_service),
) -> UserSyncService:
    return UserSyncService(firestore)
