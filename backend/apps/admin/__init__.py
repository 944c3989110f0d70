"""Admin module - privileged user maintenance operations."""

from apps.admin.routes import router

__all__ = ["router"]
