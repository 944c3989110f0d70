"""Admin routes - registers all admin endpoints.

Operations are exposed as callables: POST with a JSON payload and the
caller's Firebase ID token as a bearer token.
"""

from fastapi import APIRouter

from apps.admin.handlers import (
    ban_user,
    delete_user_completely,
    get_admin_stats,
    migrate_auth_users,
    unban_user,
)
from apps.admin.schemas import (
    AdminStatsResponse,
    DeleteUserResponse,
    MigrationResponse,
    OperationResponse,
)

router = APIRouter(prefix="/admin", tags=["Admin"])

# POST /admin/deleteUserCompletely - Delete user and all their data
router.post("/deleteUserCompletely", response_model=DeleteUserResponse)(
    delete_user_completely
)

# POST /admin/banUser - Disable account
router.post("/banUser", response_model=OperationResponse)(ban_user)

# POST /admin/unbanUser - Re-enable account
router.post("/unbanUser", response_model=OperationResponse)(unban_user)

# POST /admin/getAdminStats - Dashboard counts
router.post("/getAdminStats", response_model=AdminStatsResponse)(get_admin_stats)

# POST /admin/migrateAuthUsersToChatUsers - Backfill chatUsers
router.post("/migrateAuthUsersToChatUsers", response_model=MigrationResponse)(
    migrate_auth_users
)
