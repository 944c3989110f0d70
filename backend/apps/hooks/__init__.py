"""Hooks module - identity platform triggers."""

from apps.hooks.routes import router

__all__ = ["router"]
