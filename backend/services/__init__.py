"""Services module for admin business logic.

Contains the operations exposed by the admin API:
- Admin authorization gate
- Firebase Auth directory access
- Cascading user deletion
- Ban / unban
- Dashboard stats
- Identity-to-chatUsers backfill and the new-account hook

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from services.authorization import AdminPolicy, CallerIdentity, is_admin
from services.identity import IdentityService
from services.migration import MigrationService
from services.moderation import ModerationService
from services.stats import StatsService
from services.types import (
    AdminStats,
    DeletionDetails,
    MigrationDetails,
    MigrationError,
    OperationResult,
)
from services.user_deletion import UserDeletionService
from services.user_sync import UserSyncService

__all__ = [
    # Authorization
    "AdminPolicy",
    "CallerIdentity",
    "is_admin",
    # Core services
    "IdentityService",
    "MigrationService",
    "ModerationService",
    "StatsService",
    "UserDeletionService",
    "UserSyncService",
    # Types
    "AdminStats",
    "DeletionDetails",
    "MigrationDetails",
    "MigrationError",
    "OperationResult",
]
