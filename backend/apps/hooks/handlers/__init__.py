"""Hook handlers."""

from apps.hooks.handlers.user_created import on_user_created

__all__ = ["on_user_created"]
