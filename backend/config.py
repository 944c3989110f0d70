"""Configuration and settings for the chat admin backend.

Uses Pydantic Settings for fail-fast validation on startup.
All required environment variables are validated at import time.
"""

import logging
import sys
from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Raises ValidationError on startup if required variables are missing.
    """

    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Firebase Configuration (required)
    # Can be either a JSON string, a file path or base64 of the credentials JSON
    firebase_credentials: str = Field(
        ..., description="Firebase service account JSON string or path to JSON file"
    )
    app_id: str = Field(
        default="fluency-flow-standalone",
        description="Application namespace under the artifacts collection",
    )

    # Admin authorization
    admin_emails: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Comma-separated emails allowed to call admin operations",
    )
    admin_claim: str = Field(
        default="admin", description="Custom token claim that grants admin access"
    )

    # Platform hooks
    hook_secret: str | None = Field(
        default=None,
        description="Shared secret the identity platform sends in X-Hook-Secret; "
        "hooks reject every request when unset",
    )

    # Application Settings
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Migration Settings
    migration_page_size: int = Field(
        default=1000,
        ge=1,
        le=1000,
        description="Accounts fetched per identity directory page (max 1000)",
    )

    # Offline Cache Settings
    cache_name: str = Field(
        default="bureaucratis-v2", description="Versioned cache bucket name"
    )
    precache_urls: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "./",
            "./index.html",
            "./icon-192.png",
            "./icon-512.png",
            "./manifest.json",
        ],
        description="Static assets cached on install",
    )
    excluded_hosts: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["firebase", "gstatic", "googleapis"],
        description="Host fragments never intercepted by the cache",
    )
    cache_origin: str = Field(
        default="http://localhost:5173/",
        description="Origin the precache URLs are resolved against",
    )
    cache_fetch_timeout: float = Field(
        default=10.0, description="Network timeout for cache fetches in seconds"
    )

    @field_validator("admin_emails", "precache_urls", "excluded_hosts", mode="before")
    @classmethod
    def split_comma_list(cls, v: Any) -> Any:
        """Accept comma-separated strings for list settings."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("admin_emails")
    @classmethod
    def normalize_emails(cls, v: list[str]) -> list[str]:
        """Compare admin emails case-insensitively."""
        return [email.lower() for email in v]

    @field_validator("firebase_credentials")
    @classmethod
    def validate_credentials_not_empty(cls, v: str, info) -> str:
        """Ensure credentials are not empty strings."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# CORS Configuration
CORS_CONFIG: dict[str, Any] = {
    "allow_origins": [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ],
    "allow_credentials": True,
    "allow_methods": ["GET", "POST", "OPTIONS"],
    "allow_headers": ["*"],
    "expose_headers": ["*"],
    "max_age": 600,
}

# FastAPI App Configuration
APP_CONFIG: dict[str, Any] = {
    "title": "Chat Admin",
    "description": (
        "Admin maintenance operations for the chat app: user deletion, "
        "ban/unban, stats and identity backfill."
    ),
    "version": "0.1.0",
    "docs_url": "/api/docs",
    "redoc_url": "/api/redoc",
    "openapi_url": "/api/openapi.json",
    "openapi_tags": [
        {
            "name": "Health",
            "description": "Health check and service status",
        },
        {
            "name": "Admin",
            "description": "Admin-only user maintenance operations",
        },
        {
            "name": "Hooks",
            "description": "Platform triggers fired by the identity directory",
        },
    ],
}


def get_app_config() -> dict[str, Any]:
    """Get FastAPI application configuration."""
    return APP_CONFIG.copy()


def get_cors_config() -> dict[str, Any]:
    """Get CORS middleware configuration."""
    return CORS_CONFIG.copy()
