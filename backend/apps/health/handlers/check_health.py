"""GET /health - Firestore reachability and admin configuration."""

from datetime import UTC, datetime

from fastapi import Depends
from pydantic import BaseModel, Field

from config import get_app_config, get_settings
from db import FirestoreService
from dependencies import get_firestore_service

# --- Response Schemas ---


class FirestoreStatus(BaseModel):
    status: str = Field(..., description="healthy or unhealthy")
    latency_ms: float | None = Field(None, description="Write+read round trip in ms")
    error: str | None = None


class AdminConfigStatus(BaseModel):
    """Whether the admin surface can be used at all."""

    admin_emails: int = Field(..., description="Allow-listed admin emails")
    admin_claim: str | None = Field(None, description="Token claim granting admin")
    hooks_enabled: bool = Field(..., description="A hook secret is configured")


class HealthResponse(BaseModel):
    status: str = Field(..., description="healthy, degraded or unhealthy")
    version: str
    environment: str
    app_id: str = Field(..., description="Namespace under artifacts/")
    firestore: FirestoreStatus
    admin: AdminConfigStatus
    timestamp: datetime


# --- Handler ---


async def check_health(
    firestore: FirestoreService = Depends(get_firestore_service),
) -> HealthResponse:
    """Report Firestore reachability and whether admins and hooks are set up.

    Unreachable Firestore is unhealthy. A reachable store with no way to
    become admin (no emails, no claim) is degraded.
    """
    settings = get_settings()
    firestore_status = FirestoreStatus(**await firestore.health_check())
    admin_status = AdminConfigStatus(
        admin_emails=len(settings.admin_emails),
        admin_claim=settings.admin_claim or None,
        hooks_enabled=bool(settings.hook_secret),
    )

    if firestore_status.status != "healthy":
        overall = "unhealthy"
    elif not (admin_status.admin_emails or admin_status.admin_claim):
        overall = "degraded"
    else:
        overall = "healthy"

    return HealthResponse(
        status=overall,
        version=get_app_config()["version"],
        environment=settings.environment,
        app_id=firestore.app_id,
        firestore=firestore_status,
        admin=admin_status,
        timestamp=datetime.now(UTC),
    )
