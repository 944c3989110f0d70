"""Admin handlers."""

from apps.admin.handlers.ban_user import ban_user
from apps.admin.handlers.delete_user import delete_user_completely
from apps.admin.handlers.get_stats import get_admin_stats
from apps.admin.handlers.migrate_users import migrate_auth_users
from apps.admin.handlers.unban_user import unban_user

__all__ = [
    "delete_user_completely",
    "ban_user",
    "unban_user",
    "get_admin_stats",
    "migrate_auth_users",
]
