"""POST /admin/migrateAuthUsersToChatUsers - Backfill chatUsers from Auth."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.admin.schemas import MigrationResponse
from dependencies import get_caller, get_migration_service
from errors import AdminError
from responses import error_response
from services.authorization import CallerIdentity
from services.migration import MigrationService

logger = logging.getLogger(__name__)


async def migrate_auth_users(
    caller: CallerIdentity | None = Depends(get_caller),
    migration_service: MigrationService = Depends(get_migration_service),
) -> MigrationResponse | JSONResponse:
    """Create or refresh a chat profile for every Firebase Auth account."""
    request_id = str(uuid.uuid4())[:8]
    logger.info("[%s] Migration request", request_id)

    try:
        result = await migration_service.migrate_auth_users(caller)
        return MigrationResponse.model_validate(result.to_dict())

    except AdminError as e:
        logger.warning("[%s] Migration failed: %s", request_id, e.message)
        return error_response(e, request_id=request_id)
