"""POST /admin/deleteUserCompletely - Delete a user and all their data."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.admin.schemas import DeleteUserResponse, UserTargetRequest
from dependencies import get_caller, get_user_deletion_service
from errors import AdminError
from responses import error_response
from services.authorization import CallerIdentity
from services.user_deletion import UserDeletionService

logger = logging.getLogger(__name__)


async def delete_user_completely(
    payload: UserTargetRequest | None = None,
    caller: CallerIdentity | None = Depends(get_caller),
    deletion_service: UserDeletionService = Depends(get_user_deletion_service),
) -> DeleteUserResponse | JSONResponse:
    """Delete a user from Firebase Auth and every collection that names them."""
    request_id = str(uuid.uuid4())[:8]
    user_id = payload.user_id if payload else None
    logger.info("[%s] Delete user request: %s", request_id, user_id)

    try:
        result = await deletion_service.delete_user_completely(caller, user_id)
        return DeleteUserResponse.model_validate(result.to_dict())

    except AdminError as e:
        logger.warning("[%s] Delete user rejected: %s", request_id, e.message)
        return error_response(e, request_id=request_id)
