"""POST /admin/banUser - Disable a user's account."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.admin.schemas import BanUserRequest, OperationResponse
from dependencies import get_caller, get_moderation_service
from errors import AdminError
from responses import error_response
from services.authorization import CallerIdentity
from services.moderation import ModerationService

logger = logging.getLogger(__name__)


async def ban_user(
    payload: BanUserRequest | None = None,
    caller: CallerIdentity | None = Depends(get_caller),
    moderation_service: ModerationService = Depends(get_moderation_service),
) -> OperationResponse | JSONResponse:
    """Ban a user. Their data is preserved."""
    request_id = str(uuid.uuid4())[:8]
    payload = payload or BanUserRequest()
    logger.info("[%s] Ban user request: %s", request_id, payload.user_id)

    try:
        result = await moderation_service.ban_user(
            caller, payload.user_id, payload.reason
        )
        return OperationResponse.model_validate(result.to_dict())

    except AdminError as e:
        logger.warning("[%s] Ban user rejected: %s", request_id, e.message)
        return error_response(e, request_id=request_id)
